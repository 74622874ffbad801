"""Consecutive working-day run analysis.

A "working day" is any calendar day with at least one work shift. The scan
is bounded to the candidate date ±14 days: no meaningful run is longer than
about four weeks, and the bound keeps history lookups small.
"""

from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterable, Set

if TYPE_CHECKING:
    from compliance.models import Event

DEFAULT_WINDOW_DAYS = 14


def work_dates_of(events: Iterable['Event']) -> Set[date]:
    """Start dates of the given events (events without a start are skipped)."""
    return {e.start_date for e in events if e.start is not None}


def longest_run(work_dates: Iterable[date], candidate_date: date, window_days: int = DEFAULT_WINDOW_DAYS) -> int:
    """
    Longest run of consecutive work dates in the window around the candidate.

    The candidate date is added to the work dates first, so the result is at
    least 1. The maximum streak anywhere in the window is returned, which
    always covers the streak containing the candidate.

    Args:
        work_dates: dates with at least one work shift
        candidate_date: date of the shift being validated
        window_days: days scanned before and after the candidate

    Returns:
        Length of the longest streak found in
        [candidate_date - window_days, candidate_date + window_days]

    Examples:
        6 work days 2024-01-01..06, candidate 2024-01-07 → 7
        same, but 2024-01-03 missing                     → 4
    """
    days = set(work_dates)
    days.add(candidate_date)

    current = candidate_date - timedelta(days=window_days)
    end = candidate_date + timedelta(days=window_days)

    max_streak = 0
    streak = 0
    while current <= end:
        if current in days:
            streak += 1
            max_streak = max(max_streak, streak)
        else:
            streak = 0
        current += timedelta(days=1)

    return max_streak
