"""
Recover a meal plan object from free-text model output.

The model is asked for JSON but frequently wraps it in prose or markdown
fences. Extraction is a single pass:

1. strict ``json.loads`` of the whole text;
2. otherwise the first complete top-level ``{...}`` found by a depth scanner
   that understands string literals, parsed strictly;
3. the result must be an object with a ``meals`` list.

Entries inside ``meals`` are returned as produced by the model.
"""

import json
import logging
from typing import Any, Dict, Optional

from app.exceptions import ExtractionFailedError, InvalidShapeError

logger = logging.getLogger("mealplan.extractor")


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant {name}")


def _strict_loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def find_first_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced top-level ``{...}`` substring, or None.

    Braces inside double-quoted strings (including escaped quotes) do not
    count towards nesting. A ``{`` that never closes (a stray emoticon,
    a truncated fragment) is skipped and scanning resumes at the next one.
    """
    start = text.find("{")
    while start != -1:
        end = _balanced_end(text, start)
        if end is not None:
            return text[start : end + 1]
        start = text.find("{", start + 1)
    return None


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index of the ``}`` closing the ``{`` at ``start``, or None"""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_meal_plan(text: str) -> Dict[str, Any]:
    """
    Parse model output into a dict with a ``meals`` list.

    Raises:
        ExtractionFailedError: no JSON object could be parsed
        InvalidShapeError: parsed value is not an object with a ``meals`` list
    """
    try:
        data = _strict_loads(text)
    except ValueError:
        candidate = find_first_json_object(text)
        if candidate is None:
            logger.warning("No JSON object found in AI response")
            raise ExtractionFailedError()
        try:
            data = _strict_loads(candidate)
        except ValueError as exc:
            logger.warning("Embedded JSON object failed to parse: %s", exc)
            raise ExtractionFailedError(details={"reason": str(exc)})

    if not isinstance(data, dict) or not isinstance(data.get("meals"), list):
        raise InvalidShapeError()
    return data
