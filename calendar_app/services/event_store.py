"""Queries against the ``events`` table."""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from calendar_app.models.event import Event
from calendar_app.schemas import EventPayload


def month_bounds(year: int, month: int) -> tuple[str, str]:
    """Return the half-open ``[start, end)`` timestamp range covering a month."""

    start = f"{year:04d}-{month:02d}-01T00:00:00"
    if month == 12:
        end = f"{year + 1:04d}-01-01T00:00:00"
    else:
        end = f"{year:04d}-{month + 1:02d}-01T00:00:00"
    return start, end


class EventStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_between(self, start: str, end: str) -> Sequence[Event]:
        rows = await self.db.execute(
            select(Event)
            .where(Event.start_date >= start, Event.start_date < end)
            .order_by(Event.start_date, Event.id)
        )
        return rows.scalars().all()

    async def get(self, event_id: int) -> Optional[Event]:
        return await self.db.get(Event, event_id)

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Event))
        return result.scalar_one()

    async def add(self, fields: EventPayload, default_color: str) -> Event:
        event = Event(
            title=fields.title,
            description=fields.description,
            start_date=fields.start_date,
            end_date=fields.end_date,
            color=fields.color or default_color,
        )
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)
        return event

    async def replace(self, event: Event, fields: EventPayload, default_color: str) -> Event:
        event.title = fields.title
        event.description = fields.description
        event.start_date = fields.start_date
        event.end_date = fields.end_date
        event.color = fields.color or default_color
        await self.db.commit()
        await self.db.refresh(event)
        return event

    async def remove(self, event: Event) -> None:
        await self.db.delete(event)
        await self.db.commit()
