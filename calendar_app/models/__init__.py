"""ORM models registered on ``calendar_app.database.Base``."""

from .event import DEFAULT_COLOR, Event

__all__ = ["DEFAULT_COLOR", "Event"]
