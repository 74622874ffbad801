"""
Input Validator for the shift compliance CLI.

Loads an input JSON file and turns schema problems into readable messages
instead of tracebacks. A bad timestamp on an event becomes

    "Invalid event: candidate.start: Input should be a valid datetime ..."

so the caller can return it like any other validation error.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from compliance.exceptions import InputError

logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)


def format_errors(exc: ValidationError) -> List[str]:
    """
    Flatten a pydantic ValidationError into "Invalid event: <field>: <msg>" lines.

    Examples:
        loc ('candidate', 'start'), msg 'Input should be a valid datetime'
          → "Invalid event: candidate.start: Input should be a valid datetime"
        loc ('events', 2, 'end')
          → "Invalid event: events[2].end: ..."
    """
    messages = []
    for error in exc.errors():
        path = ''
        for part in error.get('loc', ()):
            if isinstance(part, int):
                path += f"[{part}]"
            else:
                path += f".{part}" if path else str(part)
        messages.append(f"Invalid event: {path or 'input'}: {error.get('msg', 'invalid value')}")
    return messages


def read_json(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON object from a file.

    Raises:
        InputError: if the file is missing, unreadable, or not a JSON object
    """
    path = Path(path)
    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise InputError(f"Input file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise InputError(f"Cannot read {path}: {e}")

    if not isinstance(data, dict):
        raise InputError(f"Input must be a JSON object, got {type(data).__name__}")
    return data


def parse_input(data: Dict[str, Any], model: Type[ModelT]) -> ModelT:
    """
    Build an input model, converting schema errors to InputError.

    Raises:
        InputError: carrying one formatted message per schema error
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = format_errors(e)
        logger.warning("Input rejected with %d error(s): %s", len(errors), errors[0])
        raise InputError(errors[0], errors=errors)
