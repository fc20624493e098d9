"""Service layer for calendar events."""

from .event_service import EventService
from .event_store import EventStore, month_bounds

__all__ = ["EventService", "EventStore", "month_bounds"]
