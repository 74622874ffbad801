"""Rule Configuration.

Holds every threshold used by the shift rules and the weekly aggregator, and
reads overrides from a `constraintList` JSON fragment.

JSON Format:
    [
      {"id": "maxDailyHours", "defaultValue": 12},
      {"id": "minRestBetweenShifts", "defaultValue": 11},
      {"id": "maxConsecutiveWorkingDays", "defaultValue": 6, "enabled": true},
      {"id": "weeklyHoursCap", "tierOverrides": {"4": 30, "6": 40, "8": 53}},
      {"id": "C4", "enforcement": "disabled"}
    ]

Unknown ids are ignored. `enforcement: "disabled"` or `enabled: false` turns
a rule off.
"""

import logging
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


DAILY_HOURS = 'C1'
WEEKLY_HOURS = 'C2'
CONSECUTIVE_DAYS = 'C3'
REST_PERIOD = 'C4'

ALL_RULES = (DAILY_HOURS, REST_PERIOD, WEEKLY_HOURS, CONSECUTIVE_DAYS)

RULE_NAMES = {
    DAILY_HOURS: 'Daily Hours Cap',
    WEEKLY_HOURS: 'Weekly Hours Cap',
    CONSECUTIVE_DAYS: 'Consecutive Working Days',
    REST_PERIOD: 'Rest Period Between Shifts',
}

# Mapping from human-readable constraint IDs to internal rule codes
CONSTRAINT_ID_MAP = {
    'maxDailyHours': DAILY_HOURS,
    'dailyHoursCap': DAILY_HOURS,
    'weeklyHoursCap': WEEKLY_HOURS,
    'maxConsecutiveWorkingDays': CONSECUTIVE_DAYS,
    'minRestBetweenShifts': REST_PERIOD,
    # Also support direct rule codes
    'C1': DAILY_HOURS,
    'C2': WEEKLY_HOURS,
    'C3': CONSECUTIVE_DAYS,
    'C4': REST_PERIOD,
}

# Rule code -> RuleConfig field updated by `defaultValue`
DEFAULT_VALUE_FIELDS = {
    DAILY_HOURS: 'maxDailyHours',
    WEEKLY_HOURS: 'defaultWeeklyHours',
    CONSECUTIVE_DAYS: 'maxConsecutiveDays',
    REST_PERIOD: 'minRestHours',
}

PAID_LEAVE_TYPES = frozenset({
    'Paid leave',
    'Sick leave',
    'Maternity leave',
    'Paternity leave',
})

UNPAID_LEAVE_TYPES = frozenset({
    'Day off',
    'Unpaid leave',
})

# Weekly ceilings per daily contract tier. Reflects external labour-rate
# tiers: not proportional to the daily hours.
WEEKLY_HOURS_BY_CONTRACT = {4: 30, 6: 40, 8: 53}


class RuleConfig(BaseModel):
    """Thresholds for shift validation and weekly aggregation."""

    model_config = ConfigDict(frozen=True)

    maxDailyHours: float = Field(12, gt=0, description="Max worked hours per calendar day")
    minRestHours: float = Field(12, ge=0, description="Min rest between two shifts (hours)")
    maxConsecutiveDays: int = Field(6, ge=1, description="Max consecutive calendar days with work")
    consecutiveWindowDays: int = Field(14, ge=1, description="Days scanned either side of the candidate")
    weeklyHoursByContract: Dict[int, int] = Field(
        default_factory=lambda: dict(WEEKLY_HOURS_BY_CONTRACT),
        description="Weekly ceiling keyed by daily contract hours"
    )
    defaultWeeklyHours: int = Field(53, gt=0, description="Ceiling for unknown contract tiers")
    defaultContractHours: int = Field(8, gt=0, description="Daily contract hours when unset")
    breakThresholdHours: float = Field(6, ge=0, description="Shifts longer than this get a break")
    breakHours: float = Field(0.5, ge=0, description="Break deducted from long shifts")
    paidLeaveTypes: FrozenSet[str] = Field(default=PAID_LEAVE_TYPES)
    unpaidLeaveTypes: FrozenSet[str] = Field(default=UNPAID_LEAVE_TYPES)
    enabledRules: FrozenSet[str] = Field(default=frozenset(ALL_RULES))

    @field_validator('weeklyHoursByContract')
    @classmethod
    def _positive_ceilings(cls, value: Dict[int, int]) -> Dict[int, int]:
        for tier, ceiling in value.items():
            if ceiling <= 0:
                raise ValueError(f"weekly ceiling for {tier}-hour contract must be positive")
        return value

    @field_validator('enabledRules')
    @classmethod
    def _known_rules(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        unknown = set(value) - set(ALL_RULES)
        if unknown:
            raise ValueError(f"unknown rule codes: {sorted(unknown)}")
        return value

    def is_enabled(self, rule: str) -> bool:
        return rule in self.enabledRules

    @classmethod
    def from_constraint_list(
        cls,
        constraint_list: Optional[List[Any]],
        base: Optional['RuleConfig'] = None
    ) -> 'RuleConfig':
        """
        Build a config from `constraintList` entries on top of `base` (or defaults).

        Supports:
        1. Simple format: {"constraintId": "C1", "enabled": false}
        2. Value format: {"id": "maxDailyHours", "defaultValue": 10}
        3. Tier format: {"id": "weeklyHoursCap", "tierOverrides": {"4": 28}}

        Raises:
            pydantic.ValidationError: when an override is out of range
        """
        base = base or cls()
        updates: Dict[str, Any] = {}
        enabled = set(base.enabledRules)
        tiers = dict(base.weeklyHoursByContract)

        for entry in constraint_list or []:
            # Convert to dict if Pydantic model
            if hasattr(entry, 'model_dump'):
                config = entry.model_dump()
            elif isinstance(entry, dict):
                config = entry
            else:
                continue

            raw_id = config.get('constraintId') or config.get('id')
            if not raw_id:
                continue

            rule = CONSTRAINT_ID_MAP.get(raw_id)
            if rule is None:
                logger.debug("Ignoring unknown constraint id %s", raw_id)
                continue

            is_on = config.get('enabled', True)
            if config.get('enforcement', 'hard') == 'disabled':
                is_on = False
            if is_on:
                enabled.add(rule)
            else:
                enabled.discard(rule)

            if config.get('defaultValue') is not None:
                updates[DEFAULT_VALUE_FIELDS[rule]] = config['defaultValue']

            if rule == WEEKLY_HOURS and config.get('tierOverrides'):
                for tier_key, override_value in config['tierOverrides'].items():
                    # Nested format: {"4": {"value": 30}}
                    if isinstance(override_value, dict) and 'value' in override_value:
                        override_value = override_value['value']
                    tiers[int(tier_key)] = override_value

        updates['enabledRules'] = frozenset(enabled)
        updates['weeklyHoursByContract'] = tiers

        # model_copy skips validation, so rebuild through the constructor
        return cls(**{**base.model_dump(), **updates})
