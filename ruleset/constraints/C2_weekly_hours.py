"""C2: Weekly hours cap by contract tier (HARD constraint).

Week definition: ISO week, Monday to Sunday, of the candidate's start date.
Every shift whose start date falls in that week counts its full wall-clock
duration (breaks are not deducted here).

Ceiling by daily contract hours: 4h → 30h, 6h → 40h, 8h/unset → 53h,
unknown tiers → 53h.
"""
import logging
from typing import TYPE_CHECKING, List, Optional

from ruleset.engine.contract_tiers import daily_contract_hours, max_weekly_hours
from ruleset.engine.rule_config import RuleConfig
from ruleset.engine.time_utils import in_week, week_start

if TYPE_CHECKING:
    from compliance.models import Employee, Event

logger = logging.getLogger(__name__)


def check_constraint(
    candidate: 'Event',
    existing: List['Event'],
    employee: 'Employee',
    config: RuleConfig
) -> Optional[str]:
    """
    Sum the candidate and the week's shifts and compare with the tier ceiling.

    Returns:
        Violation message including the contract tier, or None
    """
    contract_hours = daily_contract_hours(employee, config)
    weekly_cap = max_weekly_hours(contract_hours, config)

    monday = week_start(candidate.start)
    week_shifts = [e for e in existing if in_week(e.start_date, monday)]

    total_minutes = candidate.duration_minutes
    for event in week_shifts:
        total_minutes += event.duration_minutes

    total_hours = total_minutes / 60.0
    logger.debug(
        "[C2] week of %s: %.2fh over %d shift(s), cap %dh (%d-hour contract)",
        monday, total_hours, len(week_shifts) + 1, weekly_cap, contract_hours
    )

    if total_hours > weekly_cap:
        excess = total_hours - weekly_cap
        return (
            f"Weekly limit exceeded for {contract_hours}-hour contract! "
            f"Total: {total_hours:.1f}h (Max: {weekly_cap}h). Excess: {excess:.1f}h"
        )
    return None
