"""Error types raised by the event service and translated by the HTTP layer.

Every error carries the HTTP status it maps to, a short ``error`` label and
optional ``details``. ``to_dict()`` produces the JSON body returned to clients:

    {"error": "Validation error", "details": [{"field": "title", "message": "..."}]}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class Violation:
    """One failed check on one field of an event payload."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class CalendarError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        self.message = message or self.error
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(CalendarError):
    """A payload or path parameter failed validation. Client-fixable."""

    status_code = 400
    error = "Validation error"

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations = list(violations)
        super().__init__(
            "; ".join(f"{v.field}: {v.message}" for v in self.violations),
            details=[v.to_dict() for v in self.violations],
        )


class NotFoundError(CalendarError):
    """The referenced event id does not exist."""

    status_code = 404
    error = "Event not found"

    def __init__(self, event_id: int) -> None:
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found")


class InternalError(CalendarError):
    """Storage or connection failure. The message is only exposed in development."""

    status_code = 500
    error = "Internal server error"


__all__ = [
    "CalendarError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
    "Violation",
]
