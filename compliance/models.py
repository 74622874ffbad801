"""
Pydantic models for the shift compliance service.

Defines the employee/event snapshots handed in by the surrounding
application and the results handed back (validation outcome, weekly
summaries, daily breakdown).
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ruleset.engine.time_utils import iso_week_number, minutes_between, normalize_datetime


class Employee(BaseModel):
    """
    Read-only employee snapshot.

    `contractDailyHours` is both the hours worked per scheduled day and the
    hours credited per paid-leave day (4, 6 or 8; unset means 8).
    `hourlyRate` is a monetary rate and is never read as hours.
    """

    employeeId: Optional[str] = Field(None, description="Employee identifier")
    name: Optional[str] = Field(None, description="Display name")
    lastname: Optional[str] = Field(None, description="Family name")
    contractDailyHours: Optional[int] = Field(
        None,
        gt=0,
        description="Declared daily contract hours (4/6/8). Unset defaults to 8."
    )
    hourlyRate: Optional[Decimal] = Field(None, ge=0, description="Monetary rate per hour")

    model_config = ConfigDict(extra='allow', coerce_numbers_to_str=True)

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.name, self.lastname) if part) or str(self.employeeId)


class Event(BaseModel):
    """
    Work shift or leave entry (candidate or historical).

    Work shifts carry start/end timestamps and no leave tag. Leave entries
    carry a `leaveType` and conventionally start == end == midnight of the
    leave date, or no timestamps at all.
    """

    eventId: Optional[str] = Field(None, description="Event identifier (required to exclude it on edit)")
    employeeId: Optional[str] = Field(None, description="Owning employee")
    start: Optional[datetime] = Field(None, description="Start timestamp (timezone offset dropped)")
    end: Optional[datetime] = Field(None, description="End timestamp (timezone offset dropped)")
    leaveType: Optional[str] = Field(None, description="Leave tag, e.g. 'Paid leave', 'Day off'")
    activity: Optional[str] = Field(None, description="Activity label, e.g. 'Cashier'")
    title: Optional[str] = None

    model_config = ConfigDict(extra='allow', coerce_numbers_to_str=True)

    @field_validator('start', 'end', mode='before')
    @classmethod
    def _wall_clock(cls, value: Any) -> Any:
        if isinstance(value, (str, datetime)):
            return normalize_datetime(value)
        return value

    @property
    def is_leave(self) -> bool:
        return bool(self.leaveType and self.leaveType.strip())

    @property
    def has_times(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def start_date(self) -> Optional[date]:
        return self.start.date() if self.start is not None else None

    @property
    def duration_minutes(self) -> int:
        """Whole minutes between start and end (0 when a timestamp is missing)."""
        if not self.has_times:
            return 0
        return minutes_between(self.start, self.end)


class ValidationResult(BaseModel):
    """
    Outcome of a shift validation.

    Immutable: rules return optional messages and the validator builds the
    tuple once.
    """

    errors: Tuple[str, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def first_error(self) -> Optional[str]:
        return self.errors[0] if self.errors else None

    @classmethod
    def success(cls) -> 'ValidationResult':
        return cls()

    @classmethod
    def from_errors(cls, errors) -> 'ValidationResult':
        return cls(errors=tuple(e for e in errors if e))

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


class WeeklyHours(BaseModel):
    """Credited work hours and break hours for one week."""

    workHours: Decimal = Field(Decimal('0.00'), description="Credited hours incl. paid leave")
    breakHours: Decimal = Field(Decimal('0.00'), description="Break hours from work shifts")

    model_config = ConfigDict(frozen=True)


class WeeklyHoursSummary(BaseModel):
    """Weekly record keyed by (employeeId, weekStart)."""

    employeeId: Optional[str] = None
    weekStart: date = Field(..., description="Monday of the ISO week")
    weekEnd: Optional[date] = Field(None, description="Sunday of the ISO week")
    weekNumber: Optional[int] = Field(None, description="ISO week number (1-53)")
    year: Optional[int] = None
    workHours: Decimal = Decimal('0.00')
    breakHours: Decimal = Decimal('0.00')
    actualWorkHours: Optional[Decimal] = Field(
        None,
        description="Hours actually worked; equals workHours until time tracking exists"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('weekStart')
    @classmethod
    def _monday(cls, value: date) -> date:
        if value.weekday() != 0:
            raise ValueError(f"weekStart must be a Monday, got {value.isoformat()} ({value.strftime('%A')})")
        return value

    @model_validator(mode='before')
    @classmethod
    def _derive_week_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        start = data.get('weekStart')
        if isinstance(start, str):
            start = date.fromisoformat(start)
        if isinstance(start, date):
            data.setdefault('weekEnd', start + timedelta(days=6))
            data.setdefault('weekNumber', iso_week_number(start))
            data.setdefault('year', start.year)
        if data.get('actualWorkHours') is None:
            data['actualWorkHours'] = data.get('workHours', Decimal('0.00'))
        return data


class DailyWorkHours(BaseModel):
    """One calendar day of an employee's schedule."""

    date: date
    startTime: Optional[time] = None
    endTime: Optional[time] = None
    workHours: str = Field("Day off", description="'08:00 - 16:00', the leave tag, or 'Day off'")
    activity: Optional[str] = None
    leaveType: Optional[str] = None
    isWorkDay: bool = False
    isDayOff: bool = True


# ============================================================================
# COMMAND-LINE INPUT MODELS
# ============================================================================

class ValidateEventInput(BaseModel):
    """Input file for `run_validator validate`."""

    employee: Optional[Employee] = None
    candidate: Event
    events: List[Event] = Field(default_factory=list, description="Employee's existing events")
    constraintList: Optional[List[Dict[str, Any]]] = Field(None, description="Rule overrides")

    model_config = ConfigDict(extra='allow')


class WeeklyHoursInput(BaseModel):
    """Input file for `run_validator weekly`."""

    employee: Employee
    events: List[Event] = Field(default_factory=list)
    constraintList: Optional[List[Dict[str, Any]]] = None

    model_config = ConfigDict(extra='allow')
