"""Calendar and Duration Utilities.

Canonical time model used by every rule and by the weekly aggregator:
  - week boundary: ISO week, Monday (weekStart) to Sunday (weekStart + 6)
  - shift length: whole minutes between start and end (wall clock, truncated)
  - hours: minutes / 60, rounded to 2 decimals (ROUND_HALF_UP)
  - rest gaps: whole hours, truncated toward zero

Examples:
  09:00-17:00          → 480 min → 8.00h
  09:00-16:20          → 440 min → 7.33h
  22:00 → next 10:00   → rest gap of 12h
  Wed 2024-01-03       → week_start = Mon 2024-01-01, week_end = Sun 2024-01-07
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Union

HOURS_QUANTUM = Decimal('0.01')


def normalize_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Normalize a datetime value to an offset-naive wall-clock datetime.

    Handles:
    - "2026-01-13T07:00:00+08:00" (with timezone, offset dropped)
    - "2026-01-13T07:00:00Z"
    - "2026-01-13T07:00:00" (without timezone)
    - datetime instances (tzinfo dropped)

    Raises:
        ValueError: if a string cannot be parsed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    text = str(value).strip()
    if not text:
        return None
    if text.endswith('Z'):
        text = text[:-1]
    return datetime.fromisoformat(text).replace(tzinfo=None)


def week_start(day: Union[date, datetime]) -> date:
    """Return the Monday of the ISO week containing `day`."""
    if isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day.weekday())


def week_end(day: Union[date, datetime]) -> date:
    """Return the Sunday of the ISO week containing `day`."""
    return week_start(day) + timedelta(days=6)


def in_week(day: date, monday: date) -> bool:
    return monday <= day <= monday + timedelta(days=6)


def iso_week_number(day: date) -> int:
    """ISO-8601 week number (1-53), weeks start on Monday."""
    return day.isocalendar()[1]


def date_range(start: date, end: date) -> List[date]:
    """Inclusive list of days from start to end (empty if end < start)."""
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def whole_hours_between(start: datetime, end: datetime) -> int:
    """Whole hours from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 3600)


def hours_from_minutes(minutes: int) -> Decimal:
    """Convert minutes to hours rounded half-up to 2 decimals."""
    return (Decimal(minutes) / Decimal(60)).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def as_hours(value) -> Decimal:
    """Coerce an int/float/str/Decimal hour amount to a 2-decimal Decimal."""
    if isinstance(value, Decimal):
        dec = value
    else:
        dec = Decimal(str(value))
    return dec.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)
