"""Event classification: work shift, paid leave or unpaid leave.

Classification is by leave tag first, timestamps second:

  leaveType blank + start and end set  → WORK
  leaveType in paid set                → PAID_LEAVE  (credited with contract hours)
  any other leaveType                  → UNPAID_LEAVE (zero credit)
  leaveType blank + missing timestamp  → UNPAID_LEAVE (carries no hours)

Paid set: Paid leave, Sick leave, Maternity leave, Paternity leave.
Tags are trimmed of surrounding whitespace and compared case-sensitively,
so "paid leave" is not "Paid leave".
"""

import logging
from collections import OrderedDict
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ruleset.engine.rule_config import PAID_LEAVE_TYPES, UNPAID_LEAVE_TYPES, RuleConfig

if TYPE_CHECKING:
    from compliance.models import Event

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    WORK = 'work'
    PAID_LEAVE = 'paid_leave'
    UNPAID_LEAVE = 'unpaid_leave'


def _normalize_tag(tag: Optional[str]) -> str:
    return (tag or '').strip()


def is_paid_leave_type(leave_type: Optional[str], config: Optional[RuleConfig] = None) -> bool:
    """
    Check whether a leave tag earns paid-leave credit.

    Examples:
        is_paid_leave_type('Sick leave')   → True
        is_paid_leave_type(' Paid leave ') → True
        is_paid_leave_type('paid leave')   → False (case-sensitive)
        is_paid_leave_type('Day off')      → False
        is_paid_leave_type('Sabbatical')   → False (unknown tags are unpaid)
    """
    tag = _normalize_tag(leave_type)
    if not tag:
        return False
    paid = config.paidLeaveTypes if config is not None else PAID_LEAVE_TYPES
    return tag in {_normalize_tag(t) for t in paid}


def classify(event: 'Event', config: Optional[RuleConfig] = None) -> EventKind:
    """Resolve an event to exactly one EventKind."""
    if _normalize_tag(event.leaveType):
        if is_paid_leave_type(event.leaveType, config):
            return EventKind.PAID_LEAVE
        unpaid = config.unpaidLeaveTypes if config is not None else UNPAID_LEAVE_TYPES
        if _normalize_tag(event.leaveType) not in {_normalize_tag(t) for t in unpaid}:
            logger.debug("Unknown leave type %r treated as unpaid", event.leaveType)
        return EventKind.UNPAID_LEAVE
    if event.start is not None and event.end is not None:
        return EventKind.WORK
    return EventKind.UNPAID_LEAVE


def partition(
    events: Iterable['Event'],
    config: Optional[RuleConfig] = None
) -> Dict[EventKind, List['Event']]:
    """Split events by kind, keeping input order within each bucket."""
    buckets: Dict[EventKind, List['Event']] = OrderedDict((kind, []) for kind in EventKind)
    for event in events:
        buckets[classify(event, config)].append(event)
    return buckets


def work_events(events: Iterable['Event'], config: Optional[RuleConfig] = None) -> List['Event']:
    return [e for e in events if classify(e, config) is EventKind.WORK]
