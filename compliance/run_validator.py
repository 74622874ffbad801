"""
Command-line driver for the shift compliance checks.

Usage:
    python -m compliance.run_validator validate --in input/shift.json [--update] [--out result.json]
    python -m compliance.run_validator weekly --in input/history.json --date 2024-01-03
    python -m compliance.run_validator weekly --in input/history.json --all

`validate` exits 0 when the shift is valid, 1 when it is rejected (or the
input has schema errors) and 2 when the input file cannot be read.
"""

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from compliance.event_store import InMemoryEventStore
from compliance.exceptions import InputError
from compliance.input_validator import parse_input, read_json
from compliance.models import Employee, Event, ValidateEventInput, WeeklyHoursInput
from compliance.output_builder import (
    build_error_output,
    build_validation_output,
    build_weekly_output,
    dumps,
)
from compliance.shift_validator import ShiftComplianceValidator
from compliance.weekly_hours import WeeklyHoursAggregator
from ruleset.engine.rule_config import RuleConfig
from ruleset.engine.time_utils import week_end, week_start

LOG_LEVEL_ENV = 'SHIFT_COMPLIANCE_LOG_LEVEL'

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2

logger = logging.getLogger("compliance.cli")


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _owned_events(events: List[Event], employee: Optional[Employee]) -> List[Event]:
    """Attach the employee id to events that do not name an owner."""
    if employee is None or not employee.employeeId:
        return list(events)
    return [
        e if e.employeeId else e.model_copy(update={'employeeId': employee.employeeId})
        for e in events
    ]


def _emit(text: str, outfile: Optional[str]) -> None:
    if outfile:
        path = Path(outfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", path)
    else:
        print(text)


def run_validate(args) -> int:
    try:
        raw = read_json(args.infile)
        request = parse_input(raw, ValidateEventInput)
    except InputError as e:
        logger.error("%s", e)
        _emit(dumps(build_error_output(e.errors or [str(e)])), args.outfile)
        return EXIT_INVALID if e.errors else EXIT_BAD_INPUT

    config = RuleConfig.from_constraint_list(request.constraintList)
    store = InMemoryEventStore(_owned_events(request.events, request.employee))
    candidate = _owned_events([request.candidate], request.employee)[0]

    validator = ShiftComplianceValidator(store, config)
    result = validator.validate(candidate, request.employee, is_update=args.update)

    _emit(dumps(build_validation_output(result, is_update=args.update, input_data=raw)), args.outfile)
    return EXIT_OK if result.valid else EXIT_INVALID


def run_weekly(args) -> int:
    try:
        raw = read_json(args.infile)
        request = parse_input(raw, WeeklyHoursInput)
    except InputError as e:
        logger.error("%s", e)
        _emit(dumps(build_error_output(e.errors or [str(e)])), args.outfile)
        return EXIT_INVALID if e.errors else EXIT_BAD_INPUT

    config = RuleConfig.from_constraint_list(request.constraintList)
    aggregator = WeeklyHoursAggregator(config)
    events = _owned_events(request.events, request.employee)

    if args.date is not None:
        store = InMemoryEventStore(events)
        summaries = [aggregator.summary_for_date(store, request.employee, args.date)]
        monday = week_start(args.date)
        daily = aggregator.daily_work_hours(events, monday, week_end(monday))
    else:
        summaries = aggregator.recalculate_all(events, request.employee)
        daily = None

    _emit(dumps(build_weekly_output(summaries, daily=daily, input_data=raw)), args.outfile)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="shift-compliance", description="Shift compliance checks and weekly hours")
    ap.add_argument("--log-level", dest="log_level", default=None,
                    help=f"DEBUG/INFO/WARNING (default: ${LOG_LEVEL_ENV} or INFO)")
    sub = ap.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate a candidate shift")
    validate.add_argument("--in", dest="infile", required=True)
    validate.add_argument("--out", dest="outfile", required=False, default=None)
    validate.add_argument("--update", action="store_true", help="Candidate replaces a stored event")
    validate.set_defaults(handler=run_validate)

    weekly = sub.add_parser("weekly", help="Compute weekly hour summaries")
    weekly.add_argument("--in", dest="infile", required=True)
    weekly.add_argument("--out", dest="outfile", required=False, default=None)
    scope = weekly.add_mutually_exclusive_group()
    scope.add_argument("--date", type=date.fromisoformat, default=None,
                       help="Summarize the week containing this date (YYYY-MM-DD)")
    scope.add_argument("--all", dest="all_weeks", action="store_true",
                       help="Recalculate every week (default)")
    weekly.set_defaults(handler=run_weekly)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
