"""Contract tier lookup.

Weekly working-hour ceiling by declared daily contract hours:

  4h/day → 30h/week
  6h/day → 40h/week
  8h/day → 53h/week
  unset  → treated as 8h/day → 53h/week
  other  → 53h/week

The table is a fixed lookup, not a ratio.
"""

from typing import TYPE_CHECKING, Optional

from ruleset.engine.rule_config import RuleConfig

if TYPE_CHECKING:
    from compliance.models import Employee

_DEFAULT_CONFIG = RuleConfig()


def daily_contract_hours(employee: Optional['Employee'], config: Optional[RuleConfig] = None) -> int:
    """Declared daily contract hours of the employee, default 8 when unset."""
    config = config or _DEFAULT_CONFIG
    hours = getattr(employee, 'contractDailyHours', None) if employee is not None else None
    return hours if hours is not None else config.defaultContractHours


def max_weekly_hours(contract_daily_hours: Optional[int], config: Optional[RuleConfig] = None) -> int:
    """
    Weekly ceiling for a daily contract tier.

    Examples:
        max_weekly_hours(4)    → 30
        max_weekly_hours(6)    → 40
        max_weekly_hours(8)    → 53
        max_weekly_hours(None) → 53
        max_weekly_hours(5)    → 53 (unknown tier)
    """
    config = config or _DEFAULT_CONFIG
    if contract_daily_hours is None:
        contract_daily_hours = config.defaultContractHours
    return config.weeklyHoursByContract.get(contract_daily_hours, config.defaultWeeklyHours)
