"""
Labour rules for shift compliance: thresholds, event classification and
the per-rule checks.
"""
