"""C1: Daily hours cap (HARD constraint).

Total worked time on the candidate's calendar day (by start date) must not
exceed 12 hours. Durations are wall-clock deltas: a shift starting 20:00 and
ending 08:00 the next day counts 12h against its start day.
"""
import logging
from typing import TYPE_CHECKING, List, Optional

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
    """
    Sum the candidate and same-day shifts and compare with the daily cap.

    Args:
        candidate: shift being validated (start/end set)
        existing: employee's other work shifts
        employee: owner of the shifts (unused, uniform rule signature)
        config: thresholds

    Returns:
        Violation message, or None when within the cap
    """
    candidate_day = candidate.start_date

    total_minutes = candidate.duration_minutes
    same_day = [e for e in existing if e.start_date == candidate_day]
    for event in same_day:
        total_minutes += event.duration_minutes

    total_hours = total_minutes / 60.0
    logger.debug("[C1] %s: %.2fh over %d shift(s)", candidate_day, total_hours, len(same_day) + 1)

    if total_hours > config.maxDailyHours:
        return (
            f"Daily limit exceeded! Total: {total_hours:.1f}h "
            f"(Max: {config.maxDailyHours:g}h)."
        )
    return None
