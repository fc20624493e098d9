"""Turns pydantic errors into field violations and checks month parameters."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from calendar_app.exceptions import ValidationError, Violation
from calendar_app.schemas import EventPayload

_YEAR_RE = re.compile(r"[0-9]{4}")
_MONTH_RE = re.compile(r"0?[1-9]|1[0-2]")

_BODY_ERRORS = {"model_type", "model_attributes_type", "dict_type"}

# Messages for built-in pydantic error types, keyed by (field, type).
_MESSAGES = {
    ("title", "missing"): "Title is required",
    ("title", "string_type"): "Title must be a string",
    ("description", "string_type"): "Description must be a string",
    ("start_date", "missing"): "Date is required",
    ("start_date", "string_type"): "Invalid date format",
    ("end_date", "missing"): "Date is required",
    ("end_date", "string_type"): "Invalid date format",
    ("color", "string_type"): "Invalid color format",
    ("color", "string_pattern_mismatch"): "Invalid color format",
}


def violations_from_errors(errors: Iterable[Mapping[str, Any]]) -> list[Violation]:
    """Map pydantic error dicts (``loc`` relative to the body) to violations."""

    violations: list[Violation] = []
    for error in errors:
        kind = error.get("type", "")
        loc = [str(part) for part in error.get("loc", ())]
        if kind == "json_invalid":
            violations.append(Violation("body", "Malformed JSON"))
            continue
        if not loc or kind in _BODY_ERRORS:
            violations.append(Violation("body", "Expected a JSON object"))
            continue
        field = ".".join(loc)
        violations.append(Violation(field, _MESSAGES.get((field, kind), error.get("msg", "Invalid value"))))
    return violations


def ensure_valid_event(payload: Any) -> EventPayload:
    """Validate ``payload`` into an ``EventPayload`` or raise ``ValidationError``."""

    if isinstance(payload, EventPayload):
        return payload
    try:
        return EventPayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(violations_from_errors(exc.errors())) from None


def validate_event(payload: Any) -> list[Violation]:
    """Return every violation found in ``payload``; an empty list means valid."""

    try:
        ensure_valid_event(payload)
    except ValidationError as exc:
        return exc.violations
    return []


def validate_month(year: Any, month: Any) -> tuple[int, int]:
    """Check a ``year``/``month`` pair from a URL and return it as integers.

    The month may be zero-padded ("03") or not ("3").
    """

    violations: list[Violation] = []
    if not _YEAR_RE.fullmatch(str(year)):
        violations.append(Violation("year", "Invalid year format"))
    if not _MONTH_RE.fullmatch(str(month)):
        violations.append(Violation("month", "Invalid month format"))
    if violations:
        raise ValidationError(violations)
    return int(year), int(month)


__all__ = [
    "ensure_valid_event",
    "validate_event",
    "validate_month",
    "violations_from_errors",
]
