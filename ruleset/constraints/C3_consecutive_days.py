"""C3: Max consecutive working days ≤6 (HARD constraint).

A "working day" is any calendar day with at least one work shift. The run is
measured in a ±14 day window around the candidate (see
`ruleset.engine.consecutive_days`).
"""
import logging
from typing import TYPE_CHECKING, List, Optional

from ruleset.engine.consecutive_days import longest_run, work_dates_of
from ruleset.engine.rule_config import RuleConfig

if TYPE_CHECKING:
    from compliance.models import Employee, Event

logger = logging.getLogger(__name__)


def check_constraint(
    candidate: 'Event',
    existing: List['Event'],
    employee: 'Employee',
    config: RuleConfig
) -> Optional[str]:
    candidate_day = candidate.start_date
    streak = longest_run(work_dates_of(existing), candidate_day, config.consecutiveWindowDays)

    logger.debug("[C3] %s: longest run %d day(s)", candidate_day, streak)

    if streak > config.maxConsecutiveDays:
        return (
            f"Consecutive work days limit exceeded! Found: {streak} consecutive days "
            f"(Max: {config.maxConsecutiveDays})."
        )
    return None
