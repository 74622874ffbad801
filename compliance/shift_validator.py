"""
Shift Compliance Validator

Checks a candidate work shift against the employee's existing shifts before
it is saved. Runs directly on the event history (no solver) and reports
every violated rule at once.

Supported Rules:
- C1: Daily Hours Cap (12h per calendar day)
- C4: Rest Period Between Shifts (12h between consecutive shifts)
- C2: Weekly Hours Cap (30h/40h/53h by contract tier)
- C3: Consecutive Working Days (max 6)

Leave entries (any non-blank `leaveType`) are accepted without checks.

Usage:
    validator = ShiftComplianceValidator(store)
    result = validator.validate(candidate, employee)
    if not result.valid:
        print(result.errors)
"""

import logging
from datetime import timedelta
from typing import List, Optional

from compliance.event_store import EventStore
from compliance.models import Employee, Event, ValidationResult
from ruleset.constraints import (
    C1_daily_hours,
    C2_weekly_hours,
    C3_consecutive_days,
    C4_rest_period,
)
from ruleset.engine.event_classifier import work_events
from ruleset.engine.rule_config import (
    ALL_RULES,
    CONSECUTIVE_DAYS,
    DAILY_HOURS,
    REST_PERIOD,
    RULE_NAMES,
    WEEKLY_HOURS,
    RuleConfig,
)

logger = logging.getLogger(__name__)

EMPLOYEE_REQUIRED = "Employee cannot be null"
TIMES_REQUIRED = "Event start and end time cannot be null for work shifts"
END_BEFORE_START = "Event end time must be after start time"

RULE_CHECKS = {
    DAILY_HOURS: C1_daily_hours.check_constraint,
    WEEKLY_HOURS: C2_weekly_hours.check_constraint,
    CONSECUTIVE_DAYS: C3_consecutive_days.check_constraint,
    REST_PERIOD: C4_rest_period.check_constraint,
}


class ShiftComplianceValidator:
    """
    Validates a candidate shift against the labour rules.

    Args:
        event_store: any object providing `events_for_employee`
        config: rule thresholds and enabled rules
    """

    def __init__(self, event_store: EventStore, config: Optional[RuleConfig] = None):
        self.event_store = event_store
        self.config = config or RuleConfig()

    def validate(self, candidate: Event, employee: Optional[Employee], is_update: bool = False) -> ValidationResult:
        """
        Validate a work shift before creation or update.

        Args:
            candidate: shift being saved
            employee: owner of the shift
            is_update: True when the candidate replaces a stored event

        Returns:
            ValidationResult with one message per violated rule, in the
            order daily, rest, weekly, consecutive
        """
        if employee is None:
            return ValidationResult.from_errors([EMPLOYEE_REQUIRED])

        if candidate.is_leave:
            logger.debug("Leave entry %s (%s): no checks", candidate.eventId, candidate.leaveType)
            return ValidationResult.success()

        if not candidate.has_times:
            return ValidationResult.from_errors([TIMES_REQUIRED])

        if candidate.end <= candidate.start:
            return ValidationResult.from_errors([END_BEFORE_START])

        existing = self._load_history(candidate, employee, is_update)

        errors = []
        for rule in ALL_RULES:
            if not self.config.is_enabled(rule):
                continue
            message = self._run_rule(rule, candidate, existing, employee)
            if message:
                errors.append(message)

        result = ValidationResult.from_errors(errors)
        if not result.valid:
            logger.info(
                "Shift %s - %s for employee %s rejected: %s",
                candidate.start, candidate.end, employee.display_name, "; ".join(result.errors)
            )
        return result

    def _run_rule(self, rule: str, candidate: Event, existing: List[Event], employee: Employee) -> Optional[str]:
        try:
            return RULE_CHECKS[rule](candidate, existing, employee, self.config)
        except Exception as e:
            logger.exception("[%s] %s check raised", rule, RULE_NAMES[rule])
            return f"{RULE_NAMES[rule]} check failed: {e}"

    def _load_history(self, candidate: Event, employee: Employee, is_update: bool) -> List[Event]:
        """
        Fetch the employee's work shifts around the candidate date.

        The window covers the consecutive-day scan (±window days) plus one
        day either side for overnight rest gaps. This also covers the
        candidate's whole week.
        """
        span = timedelta(days=self.config.consecutiveWindowDays + 1)
        day = candidate.start_date
        history = self.event_store.events_for_employee(employee.employeeId, day - span, day + span)
        existing = [e for e in work_events(history, self.config) if e is not candidate]

        if is_update:
            if candidate.eventId:
                existing = [e for e in existing if e.eventId != candidate.eventId]
            else:
                logger.warning(
                    "Update of shift on %s for employee %s has no eventId; "
                    "stored version cannot be excluded",
                    day, employee.employeeId
                )
        return existing
