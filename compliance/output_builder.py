"""
Output builder for the shift compliance CLI.

Turns validation results and weekly summaries into JSON-ready dicts.
Decimal hours are written as strings ("37.50") so no precision is lost.
"""

import hashlib
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from compliance.models import DailyWorkHours, ValidationResult, WeeklyHoursSummary


def _json_default(value):
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def compute_input_hash(input_data: Dict[str, Any]) -> str:
    """SHA256 of the input JSON with sorted keys."""
    json_str = json.dumps(input_data, sort_keys=True, default=_json_default)
    return "sha256:" + hashlib.sha256(json_str.encode()).hexdigest()


def _meta(input_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    meta = {"generatedAt": datetime.now().isoformat()}
    if input_data is not None:
        meta["inputHash"] = compute_input_hash(input_data)
    return meta


def summary_to_dict(summary: WeeklyHoursSummary) -> Dict[str, Any]:
    return {
        "employeeId": summary.employeeId,
        "weekStart": summary.weekStart.isoformat(),
        "weekEnd": summary.weekEnd.isoformat() if summary.weekEnd else None,
        "weekNumber": summary.weekNumber,
        "year": summary.year,
        "workHours": _json_default(summary.workHours),
        "breakHours": _json_default(summary.breakHours),
        "actualWorkHours": _json_default(summary.actualWorkHours) if summary.actualWorkHours is not None else None,
    }


def daily_to_dict(day: DailyWorkHours) -> Dict[str, Any]:
    return {
        "date": day.date.isoformat(),
        "startTime": day.startTime.strftime('%H:%M') if day.startTime else None,
        "endTime": day.endTime.strftime('%H:%M') if day.endTime else None,
        "workHours": day.workHours,
        "activity": day.activity,
        "leaveType": day.leaveType,
        "isWorkDay": day.isWorkDay,
        "isDayOff": day.isDayOff,
    }


def build_validation_output(
    result: ValidationResult,
    is_update: bool = False,
    input_data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Validation response.

    {
      "valid": false,
      "errors": ["Daily limit exceeded! ..."],
      "isUpdate": false,
      "message": "Daily limit exceeded! ...",   # first error, or "Shift is valid"
      "meta": {"generatedAt", "inputHash"}
    }
    """
    output = result.to_dict()
    output["isUpdate"] = is_update
    output["message"] = result.first_error or "Shift is valid"
    output["meta"] = _meta(input_data)
    return output


def build_weekly_output(
    summaries: Iterable[WeeklyHoursSummary],
    daily: Optional[Iterable[DailyWorkHours]] = None,
    input_data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Weekly summaries (and optional daily breakdown) response."""
    weeks: List[Dict[str, Any]] = [summary_to_dict(s) for s in summaries]
    output: Dict[str, Any] = {"weeks": weeks}
    if daily is not None:
        output["days"] = [daily_to_dict(d) for d in daily]
    output["meta"] = _meta(input_data)
    return output


def build_error_output(errors: List[str]) -> Dict[str, Any]:
    """Response for input that could not be loaded."""
    return {
        "valid": False,
        "errors": list(errors),
        "message": errors[0] if errors else "Invalid input",
        "meta": _meta(None),
    }


def dumps(output: Dict[str, Any]) -> str:
    return json.dumps(output, indent=2, default=_json_default)
