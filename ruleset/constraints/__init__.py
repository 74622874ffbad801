"""
Shift rules, one module per rule code.

Each module exposes check_constraint(candidate, existing, employee, config)
returning a violation message or None.
"""
