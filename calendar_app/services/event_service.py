"""CRUD operations on calendar events.

Write paths always validate the payload before looking the target up, so a
malformed update of a missing event reports the validation error, not 404.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from calendar_app.exceptions import InternalError, NotFoundError
from calendar_app.models.event import DEFAULT_COLOR, Event
from calendar_app.services.event_store import EventStore, month_bounds
from calendar_app.validation import ensure_valid_event, validate_month

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, store: EventStore, *, default_color: str = DEFAULT_COLOR) -> None:
        self.store = store
        self.default_color = default_color

    @classmethod
    def for_session(cls, db: AsyncSession) -> "EventService":
        return cls(EventStore(db))

    async def _rollback(self, operation: str, exc: SQLAlchemyError) -> InternalError:
        logger.exception("Storage failure during %s", operation)
        try:
            await self.store.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback after failed %s also failed", operation)
        return InternalError(str(exc))

    async def list_by_month(self, year: Any, month: Any) -> Sequence[Event]:
        year_value, month_value = validate_month(year, month)
        start, end = month_bounds(year_value, month_value)
        try:
            return await self.store.list_between(start, end)
        except SQLAlchemyError as exc:
            raise await self._rollback("list_by_month", exc) from exc

    async def get(self, event_id: int) -> Event:
        try:
            event = await self.store.get(event_id)
        except SQLAlchemyError as exc:
            raise await self._rollback("get", exc) from exc
        if event is None:
            logger.warning("Event %s not found", event_id)
            raise NotFoundError(event_id)
        return event

    async def create(self, payload: Any) -> Event:
        fields = ensure_valid_event(payload)
        try:
            event = await self.store.add(fields, self.default_color)
        except SQLAlchemyError as exc:
            raise await self._rollback("create", exc) from exc
        logger.info("Created event %s", event.id)
        return event

    async def update(self, event_id: int, payload: Any) -> Event:
        fields = ensure_valid_event(payload)
        event = await self.get(event_id)
        try:
            event = await self.store.replace(event, fields, self.default_color)
        except SQLAlchemyError as exc:
            raise await self._rollback("update", exc) from exc
        logger.info("Updated event %s", event_id)
        return event

    async def delete(self, event_id: int) -> None:
        event = await self.get(event_id)
        try:
            await self.store.remove(event)
        except SQLAlchemyError as exc:
            raise await self._rollback("delete", exc) from exc
        logger.info("Deleted event %s", event_id)


__all__ = ["EventService"]
