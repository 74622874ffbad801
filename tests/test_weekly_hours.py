"""
Test Suite for the Weekly Hours Aggregator:
1. Work hours and break deduction
2. Paid-leave credit by distinct day
3. Week keys, affected weeks, full recalculation
4. Daily breakdown

Run with: pytest tests/test_weekly_hours.py -v
"""

from datetime import date, datetime, time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from compliance.event_store import InMemoryEventStore
from compliance.models import Event, WeeklyHoursSummary
from compliance.weekly_hours import WeeklyHoursAggregator
from ruleset.engine.rule_config import RuleConfig

from helpers import make_employee, make_leave, make_shift


@pytest.fixture
def aggregator():
    return WeeklyHoursAggregator()


class TestAggregate:
    """Credited hours for one week's events"""

    def test_seven_hour_shift_gets_break(self, aggregator):
        result = aggregator.aggregate([make_shift('2024-01-01T08:00', '2024-01-01T15:00')], make_employee())
        assert result.workHours == Decimal('6.50')
        assert result.breakHours == Decimal('0.50')

    def test_six_hour_shift_has_no_break(self, aggregator):
        """Boundary is exclusive"""
        result = aggregator.aggregate([make_shift('2024-01-01T08:00', '2024-01-01T14:00')], make_employee())
        assert result.workHours == Decimal('6.00')
        assert result.breakHours == Decimal('0.00')

    def test_minutes_rounded_half_up(self, aggregator):
        """09:00-16:20 = 7.33h, minus break = 6.83h"""
        result = aggregator.aggregate([make_shift('2024-01-01T09:00', '2024-01-01T16:20')], make_employee())
        assert result.workHours == Decimal('6.83')
        assert result.breakHours == Decimal('0.50')

    def test_week_of_shifts(self, aggregator):
        events = [make_shift(f'2024-01-0{d}T08:00', f'2024-01-0{d}T16:00') for d in range(1, 6)]
        result = aggregator.aggregate(events, make_employee())
        assert result.workHours == Decimal('37.50')
        assert result.breakHours == Decimal('2.50')

    def test_paid_leave_same_day_credited_once(self, aggregator):
        """Three paid-leave entries on one date → 8h, not 24h"""
        events = [make_leave('2024-01-02', 'Paid leave', f'L{i}') for i in range(3)]
        result = aggregator.aggregate(events, make_employee(contract_hours=8))
        assert result.workHours == Decimal('8.00')
        assert result.breakHours == Decimal('0.00')

    def test_paid_leave_uses_contract_hours(self, aggregator):
        events = [make_leave('2024-01-02', 'Sick leave'), make_leave('2024-01-03', 'Paid leave')]
        result = aggregator.aggregate(events, make_employee(contract_hours=6))
        assert result.workHours == Decimal('12.00')

    def test_paid_leave_defaults_to_eight(self, aggregator):
        result = aggregator.aggregate([make_leave('2024-01-02')], make_employee())
        assert result.workHours == Decimal('8.00')

    def test_paid_leave_without_date_skipped(self, aggregator):
        result = aggregator.aggregate([Event(employeeId='E1', leaveType='Paid leave')], make_employee())
        assert result.workHours == Decimal('0.00')

    def test_unpaid_leave_ignored(self, aggregator):
        day_off = Event(
            employeeId='E1',
            start=make_shift('2024-01-01T08:00', '2024-01-01T16:00').start,
            end=make_shift('2024-01-01T08:00', '2024-01-01T16:00').end,
            leaveType='Day off',
        )
        result = aggregator.aggregate([day_off, make_leave('2024-01-02', 'Unpaid leave')], make_employee())
        assert result.workHours == Decimal('0.00')
        assert result.breakHours == Decimal('0.00')

    def test_shift_and_leave_combined(self, aggregator):
        events = [make_shift('2024-01-01T08:00', '2024-01-01T16:00'), make_leave('2024-01-02')]
        result = aggregator.aggregate(events, make_employee())
        assert result.workHours == Decimal('15.50')
        assert result.breakHours == Decimal('0.50')

    def test_idempotent(self, aggregator):
        events = [make_shift('2024-01-01T08:00', '2024-01-01T15:00'), make_leave('2024-01-02')]
        employee = make_employee()
        assert aggregator.aggregate(events, employee) == aggregator.aggregate(events, employee)

    def test_custom_break_rules(self):
        config = RuleConfig(breakThresholdHours=4, breakHours=1)
        result = WeeklyHoursAggregator(config).aggregate(
            [make_shift('2024-01-01T08:00', '2024-01-01T13:00')], make_employee()
        )
        assert result.workHours == Decimal('4.00')
        assert result.breakHours == Decimal('1.00')


class TestWeeklySummary:
    """Summaries keyed by Monday"""

    def test_snaps_to_monday(self, aggregator):
        events = [make_shift('2024-01-03T08:00', '2024-01-03T12:00')]
        summary = aggregator.summarize_week(date(2024, 1, 5), events, make_employee())
        assert summary.weekStart == date(2024, 1, 1)
        assert summary.weekEnd == date(2024, 1, 7)
        assert summary.weekNumber == 1
        assert summary.year == 2024
        assert summary.employeeId == 'E1'
        assert summary.workHours == Decimal('4.00')
        assert summary.actualWorkHours == summary.workHours

    def test_events_outside_week_ignored(self, aggregator):
        events = [
            make_shift('2023-12-31T08:00', '2023-12-31T12:00'),
            make_shift('2024-01-07T08:00', '2024-01-07T12:00'),
            make_shift('2024-01-08T08:00', '2024-01-08T12:00'),
        ]
        summary = aggregator.summarize_week(date(2024, 1, 1), events, make_employee())
        assert summary.workHours == Decimal('4.00')

    def test_week_start_must_be_monday(self):
        with pytest.raises(ValidationError):
            WeeklyHoursSummary(weekStart=date(2024, 1, 3))

    def test_summary_for_date_queries_store(self, aggregator):
        store = InMemoryEventStore([
            make_shift('2024-01-02T08:00', '2024-01-02T16:00', 'S1'),
            make_shift('2024-01-09T08:00', '2024-01-09T16:00', 'S2'),
            make_leave('2024-01-04', 'Paid leave', 'L1'),
        ])
        summary = aggregator.summary_for_date(store, make_employee(), date(2024, 1, 3))
        assert summary.weekStart == date(2024, 1, 1)
        assert summary.workHours == Decimal('15.50')
        assert summary.breakHours == Decimal('0.50')

    def test_leave_missing_end_not_credited(self, aggregator):
        """A paid leave with a start but no end earns nothing"""
        leave = Event(eventId='L1', employeeId='E1', start=datetime(2024, 1, 3), leaveType='Paid leave')
        summary = aggregator.summarize_week(date(2024, 1, 1), [leave], make_employee())
        assert summary.workHours == Decimal('0.00')

    def test_store_summary_matches_recalculation(self, aggregator):
        events = [
            make_shift('2024-01-02T08:00', '2024-01-02T16:00', 'S1'),
            make_leave('2024-01-04', 'Paid leave', 'L1'),
            Event(eventId='L2', employeeId='E1', start=datetime(2024, 1, 3), leaveType='Paid leave'),
            Event(eventId='S2', employeeId='E1', start=datetime(2024, 1, 5, 8)),
        ]
        from_store = aggregator.summary_for_date(InMemoryEventStore(events), make_employee(), date(2024, 1, 3))
        recalculated = aggregator.recalculate_all(events, make_employee())
        assert [s.workHours for s in recalculated] == [from_store.workHours]
        assert from_store.workHours == Decimal('15.50')
        assert from_store.breakHours == recalculated[0].breakHours


class TestAffectedWeeks:

    def test_single_date(self):
        assert WeeklyHoursAggregator.affected_weeks(date(2024, 1, 3)) == [date(2024, 1, 1)]

    def test_move_across_weeks(self):
        """Sunday → Monday edit touches both weeks"""
        weeks = WeeklyHoursAggregator.affected_weeks(date(2024, 1, 7), date(2024, 1, 8))
        assert weeks == [date(2024, 1, 1), date(2024, 1, 8)]

    def test_same_week_deduplicated(self):
        weeks = WeeklyHoursAggregator.affected_weeks(date(2024, 1, 2), date(2024, 1, 4), None)
        assert weeks == [date(2024, 1, 1)]


class TestRecalculateAll:

    def test_groups_by_monday(self, aggregator):
        events = [
            make_shift('2024-01-15T08:00', '2024-01-15T16:00'),
            make_shift('2024-01-02T08:00', '2024-01-02T12:00'),
            make_shift('2024-01-07T08:00', '2024-01-07T12:00'),
            make_leave('2024-01-16', 'Paid leave'),
        ]
        summaries = aggregator.recalculate_all(events, make_employee())
        assert [s.weekStart for s in summaries] == [date(2024, 1, 1), date(2024, 1, 15)]
        assert summaries[0].workHours == Decimal('8.00')
        assert summaries[1].workHours == Decimal('15.50')

    def test_undated_events_ignored(self, aggregator):
        events = [
            Event(employeeId='E1', leaveType='Paid leave'),
            Event(employeeId='E1', start=make_shift('2024-01-02T08:00', '2024-01-02T12:00').start),
        ]
        assert aggregator.recalculate_all(events, make_employee()) == []


class TestDailyWorkHours:

    def test_breakdown(self, aggregator):
        events = [
            make_shift('2024-01-01T08:00', '2024-01-01T16:00', activity='Cashier'),
            make_leave('2024-01-02', 'Sick leave'),
        ]
        days = aggregator.daily_work_hours(events, date(2024, 1, 1), date(2024, 1, 3))
        assert [d.date for d in days] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]

        assert days[0].workHours == "08:00 - 16:00"
        assert days[0].startTime == time(8, 0)
        assert days[0].endTime == time(16, 0)
        assert days[0].activity == 'Cashier'
        assert days[0].isWorkDay and not days[0].isDayOff

        assert days[1].workHours == 'Sick leave'
        assert days[1].leaveType == 'Sick leave'
        assert not days[1].isWorkDay

        assert days[2].workHours == "Day off"
        assert days[2].isDayOff

    def test_first_event_of_day_wins(self, aggregator):
        events = [
            make_shift('2024-01-01T14:00', '2024-01-01T18:00'),
            make_shift('2024-01-01T06:00', '2024-01-01T10:00'),
        ]
        days = aggregator.daily_work_hours(events, date(2024, 1, 1), date(2024, 1, 1))
        assert days[0].workHours == "06:00 - 10:00"

    def test_event_missing_end_shows_day_off(self, aggregator):
        events = [Event(employeeId='E1', start=datetime(2024, 1, 1, 8), activity='Cashier')]
        days = aggregator.daily_work_hours(events, date(2024, 1, 1), date(2024, 1, 1))
        assert days[0].workHours == "Day off"
        assert days[0].isDayOff
