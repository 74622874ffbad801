"""
Weekly Hours Aggregator

Computes credited work hours and break hours for one Monday-Sunday week,
the set of weeks touched by an event mutation, a full recomputation over an
employee's history, and a per-day breakdown for display.

Credit rules:
- Work shift: minutes / 60, rounded half-up to 2 decimals. Shifts longer
  than 6h have a 0.5h break deducted and added to breakHours.
- Paid leave: one credit of the employee's daily contract hours (default 8)
  per distinct leave date, however many paid-leave entries share the date.
- Unpaid leave: nothing.

Examples:
    7h shift            → 6.50 work + 0.50 break
    6h shift            → 6.00 work + 0.00 break
    3x 'Paid leave' on Mon, 8h contract → 8.00 work

Usage:
    aggregator = WeeklyHoursAggregator()
    summary = aggregator.summarize_week(date(2024, 1, 1), events, employee)
"""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from compliance.event_store import EventStore
from compliance.models import DailyWorkHours, Employee, Event, WeeklyHours, WeeklyHoursSummary
from ruleset.engine.contract_tiers import daily_contract_hours
from ruleset.engine.event_classifier import EventKind, partition
from ruleset.engine.rule_config import RuleConfig
from ruleset.engine.time_utils import (
    as_hours,
    date_range,
    hours_from_minutes,
    in_week,
    week_end,
    week_start,
)

logger = logging.getLogger(__name__)

ZERO_HOURS = Decimal('0.00')


class WeeklyHoursAggregator:
    """Weekly totals for payroll/reporting. Stateless apart from its config."""

    def __init__(self, config: Optional[RuleConfig] = None):
        self.config = config or RuleConfig()

    # ========================================================================
    # SINGLE WEEK
    # ========================================================================

    def aggregate(self, week_events: Iterable[Event], employee: Optional[Employee]) -> WeeklyHours:
        """
        Total credited hours and break hours for one week's events.

        The caller is responsible for passing only that week's events (see
        `summarize_week` for a version that filters by week).

        Args:
            week_events: the employee's events for one ISO week
            employee: employee owning the events (contract hours for leave credit)

        Returns:
            WeeklyHours with 2-decimal workHours and breakHours
        """
        buckets = partition(week_events, self.config)

        threshold = as_hours(self.config.breakThresholdHours)
        break_deduction = as_hours(self.config.breakHours)

        work_hours = ZERO_HOURS
        break_hours = ZERO_HOURS
        for event in buckets[EventKind.WORK]:
            shift_hours = hours_from_minutes(event.duration_minutes)
            if shift_hours > threshold:
                shift_hours -= break_deduction
                break_hours += break_deduction
            work_hours += shift_hours

        leave_days = set()
        for event in buckets[EventKind.PAID_LEAVE]:
            if event.start is None:
                logger.debug("Skipping paid leave %s without a date", event.eventId)
                continue
            leave_days.add(event.start_date)

        credit_per_day = as_hours(daily_contract_hours(employee, self.config))
        leave_hours = credit_per_day * len(leave_days)

        logger.debug(
            "Aggregated %d shift(s), %d paid leave day(s): work=%s break=%s leave=%s",
            len(buckets[EventKind.WORK]), len(leave_days), work_hours, break_hours, leave_hours
        )

        return WeeklyHours(workHours=as_hours(work_hours + leave_hours), breakHours=as_hours(break_hours))

    def summarize_week(
        self,
        week_of: date,
        week_events: Iterable[Event],
        employee: Optional[Employee]
    ) -> WeeklyHoursSummary:
        """
        Weekly record for the week containing `week_of`.

        Any date is snapped to its Monday. Events starting outside the week
        and events missing either timestamp are ignored, the same events
        `recalculate_all` drops.
        """
        monday = week_start(week_of)
        in_range = [e for e in week_events if e.has_times and in_week(e.start_date, monday)]
        totals = self.aggregate(in_range, employee)
        return WeeklyHoursSummary(
            employeeId=employee.employeeId if employee is not None else None,
            weekStart=monday,
            workHours=totals.workHours,
            breakHours=totals.breakHours,
        )

    def summary_for_date(self, store: EventStore, employee: Employee, day: date) -> WeeklyHoursSummary:
        """Query the store for the week containing `day` and summarize it."""
        monday = week_start(day)
        events = store.events_for_employee(employee.employeeId, monday, week_end(monday))
        summary = self.summarize_week(monday, events, employee)
        logger.info(
            "Week %s for employee %s: %sh work, %sh break",
            monday, employee.employeeId, summary.workHours, summary.breakHours
        )
        return summary

    # ========================================================================
    # MUTATIONS AND RECOMPUTATION
    # ========================================================================

    @staticmethod
    def affected_weeks(*dates: Optional[date]) -> List[date]:
        """
        Mondays of the weeks touched by an event mutation.

        Pass the old and new dates of an edit (or the single date of a create
        or delete). None values are skipped.

        Examples:
            affected_weeks(date(2024, 1, 3))                    → [2024-01-01]
            affected_weeks(date(2024, 1, 7), date(2024, 1, 8))  → [2024-01-01, 2024-01-08]
        """
        return sorted({week_start(d) for d in dates if d is not None})

    def recalculate_all(self, events: Iterable[Event], employee: Employee) -> List[WeeklyHoursSummary]:
        """
        Recompute every week of an employee's history from scratch.

        Only events with both timestamps are grouped (by the Monday of their
        start date); undated leave entries are dropped. Summaries are
        returned in week order.
        """
        by_week: Dict[date, List[Event]] = defaultdict(list)
        skipped = 0
        for event in events:
            if not event.has_times:
                skipped += 1
                continue
            by_week[week_start(event.start)].append(event)

        if skipped:
            logger.info("Recalculation for employee %s skipped %d undated event(s)", employee.employeeId, skipped)

        summaries = [
            self.summarize_week(monday, by_week[monday], employee)
            for monday in sorted(by_week)
        ]
        logger.info("Recalculated %d week(s) for employee %s", len(summaries), employee.employeeId)
        return summaries

    # ========================================================================
    # DAILY BREAKDOWN
    # ========================================================================

    def daily_work_hours(self, events: Iterable[Event], start_date: date, end_date: date) -> List[DailyWorkHours]:
        """
        One entry per day from start_date to end_date inclusive.

        The first event starting on a day describes it: a leave entry shows
        its tag, a shift shows "HH:MM - HH:MM". Events missing either
        timestamp are ignored. Days without events are "Day off".
        """
        first_by_day: Dict[date, Event] = {}
        for event in sorted((e for e in events if e.has_times), key=lambda e: e.start):
            first_by_day.setdefault(event.start_date, event)

        days = []
        for day in date_range(start_date, end_date):
            event = first_by_day.get(day)
            if event is None:
                days.append(DailyWorkHours(date=day))
            elif event.is_leave:
                days.append(DailyWorkHours(
                    date=day,
                    workHours=event.leaveType,
                    leaveType=event.leaveType,
                    activity=event.activity,
                    isWorkDay=False,
                    isDayOff=True,
                ))
            else:
                days.append(DailyWorkHours(
                    date=day,
                    startTime=event.start.time(),
                    endTime=event.end.time(),
                    workHours=f"{event.start:%H:%M} - {event.end:%H:%M}",
                    activity=event.activity,
                    isWorkDay=True,
                    isDayOff=False,
                ))
        return days
