"""
Shift Compliance Validator and Weekly Hours Aggregator.
"""

from .shift_validator import ShiftComplianceValidator
from .weekly_hours import WeeklyHoursAggregator

__all__ = ['ShiftComplianceValidator', 'WeeklyHoursAggregator']
