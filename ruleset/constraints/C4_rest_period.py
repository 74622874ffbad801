"""C4: Minimum rest between shifts (HARD constraint).

At least 12 hours must separate the end of one shift from the start of the
next, in both directions around the candidate:

  existing.end  → candidate.start   ("after previous shift")
  candidate.end → existing.start    ("before next shift")

Gaps are measured in whole hours, truncated toward zero, and the comparison
is made on that truncated value. An overlap of less than an hour therefore
counts as a 0h gap; a gap of -1h or less means the shifts are not adjacent
in that direction and is ignored.
"""
import logging
from typing import TYPE_CHECKING, List, Optional

from ruleset.engine.rule_config import RuleConfig
from ruleset.engine.time_utils import whole_hours_between

if TYPE_CHECKING:
    from compliance.models import Employee, Event

logger = logging.getLogger(__name__)


def _format_hours(value: float) -> str:
    return f"{value:g}"


def _too_short(hours: int, config: RuleConfig) -> bool:
    return 0 <= hours < config.minRestHours


def check_constraint(
    candidate: 'Event',
    existing: List['Event'],
    employee: 'Employee',
    config: RuleConfig
) -> Optional[str]:
    """
    Report the first neighbouring shift that leaves too little rest.

    Shifts are inspected in start order so the reported neighbour is stable.
    """
    for event in sorted(existing, key=lambda e: e.start):
        hours = whole_hours_between(event.end, candidate.start)
        if _too_short(hours, config):
            logger.debug("[C4] %s: %dh after shift ending %s", candidate.start, hours, event.end)
            return (
                f"Insufficient rest period! Only {hours}h after previous shift "
                f"(Min: {_format_hours(config.minRestHours)}h). "
                f"Missing: {_format_hours(config.minRestHours - hours)}h"
            )

        hours = whole_hours_between(candidate.end, event.start)
        if _too_short(hours, config):
            logger.debug("[C4] %s: %dh before shift starting %s", candidate.end, hours, event.start)
            return (
                f"Insufficient rest period! Only {hours}h before next shift "
                f"(Min: {_format_hours(config.minRestHours)}h). "
                f"Missing: {_format_hours(config.minRestHours - hours)}h"
            )

    return None
