"""
Event store: lookup of an employee's events by date range.

The surrounding application owns persistence. The validator and the weekly
aggregator only need `events_for_employee`, so any object with that method
can be passed in. `InMemoryEventStore` is the implementation used by the
command-line driver and the tests.

Usage:
    store = InMemoryEventStore(events)
    week = store.events_for_employee("E1", date(2024, 1, 1), date(2024, 1, 7))
"""

import bisect
import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Protocol

from compliance.models import Event

logger = logging.getLogger(__name__)


class EventStore(Protocol):
    def events_for_employee(
        self,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Event]:
        ...


class InMemoryEventStore:
    """
    Events indexed by employee and start timestamp.

    Each employee's dated events are kept sorted by start so a date range
    query is two bisections. Events without a start are kept aside and only
    returned by unbounded queries.
    """

    def __init__(self, events: Optional[Iterable[Event]] = None):
        self._dated: Dict[str, List[Event]] = defaultdict(list)
        self._keys: Dict[str, List[datetime]] = defaultdict(list)
        self._undated: Dict[str, List[Event]] = defaultdict(list)
        for event in events or []:
            self.add(event)

    def __len__(self) -> int:
        dated = sum(len(v) for v in self._dated.values())
        undated = sum(len(v) for v in self._undated.values())
        return dated + undated

    def add(self, event: Event) -> None:
        employee_id = event.employeeId or ''
        if event.start is None:
            self._undated[employee_id].append(event)
            return
        keys = self._keys[employee_id]
        index = bisect.bisect_right(keys, event.start)
        keys.insert(index, event.start)
        self._dated[employee_id].insert(index, event)

    def remove(self, event_id: str) -> Optional[Event]:
        """Remove and return the event with `event_id` (None if absent)."""
        for employee_id, events in self._dated.items():
            for index, event in enumerate(events):
                if event.eventId == event_id:
                    del events[index]
                    del self._keys[employee_id][index]
                    return event
        for events in self._undated.values():
            for index, event in enumerate(events):
                if event.eventId == event_id:
                    return events.pop(index)
        logger.debug("Event %s not in store", event_id)
        return None

    def replace(self, event: Event) -> Optional[Event]:
        """Swap the stored event with the same id for `event`; returns the old one."""
        previous = self.remove(event.eventId) if event.eventId else None
        self.add(event)
        return previous

    def events_for_employee(
        self,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Event]:
        """
        Events of one employee whose start date lies in [start_date, end_date].

        Either bound may be None (open). Results are ordered by start.
        """
        employee_id = employee_id or ''
        events = self._dated.get(employee_id, [])
        keys = self._keys.get(employee_id, [])

        lo = 0
        hi = len(events)
        if start_date is not None:
            lo = bisect.bisect_left(keys, datetime.combine(start_date, datetime.min.time()))
        if end_date is not None:
            hi = bisect.bisect_left(keys, datetime.combine(end_date, datetime.min.time()) + timedelta(days=1))

        result = list(events[lo:hi])
        if start_date is None and end_date is None:
            result.extend(self._undated.get(employee_id, []))
        return result
