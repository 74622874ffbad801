"""Factory helpers for the compliance tests."""

from datetime import datetime

from compliance.models import Employee, Event


def make_employee(employee_id='E1', contract_hours=None, **extra):
    return Employee(employeeId=employee_id, name='Ana', lastname='Horvat', contractDailyHours=contract_hours, **extra)


def make_shift(start, end, event_id=None, employee_id='E1', activity='Cashier'):
    """Work shift from 'YYYY-MM-DDTHH:MM' strings (or datetimes)."""
    if isinstance(start, str):
        start = datetime.fromisoformat(start)
    if isinstance(end, str):
        end = datetime.fromisoformat(end)
    return Event(eventId=event_id, employeeId=employee_id, start=start, end=end, activity=activity)


def make_leave(day, leave_type='Paid leave', event_id=None, employee_id='E1'):
    """Leave entry on `day` ('YYYY-MM-DD'), start == end == midnight."""
    midnight = datetime.fromisoformat(f"{day}T00:00") if day else None
    return Event(eventId=event_id, employeeId=employee_id, start=midnight, end=midnight, leaveType=leave_type)
