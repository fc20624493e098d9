"""Field state of the create/edit event dialog."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from calendar_app.schemas import EventPayload, EventRead

DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "17:00"


@dataclass
class EventForm:
    title: str = ""
    description: str = ""
    start_date: str = ""
    start_time: str = DEFAULT_START_TIME
    end_date: str = ""
    end_time: str = DEFAULT_END_TIME
    # None leaves the color to the server default.
    color: Optional[str] = None

    @classmethod
    def for_day(cls, day: date) -> "EventForm":
        iso = day.isoformat()
        return cls(start_date=iso, end_date=iso)

    @classmethod
    def from_event(cls, event: EventRead) -> "EventForm":
        start_day, _, start_time = event.start_date.partition("T")
        end_day, _, end_time = event.end_date.partition("T")
        return cls(
            title=event.title,
            description=event.description or "",
            start_date=start_day,
            start_time=start_time[:5] or DEFAULT_START_TIME,
            end_date=end_day,
            end_time=end_time[:5] or DEFAULT_END_TIME,
            color=event.color,
        )

    @property
    def start_timestamp(self) -> str:
        return f"{self.start_date}T{self.start_time}:00"

    @property
    def end_timestamp(self) -> str:
        return f"{self.end_date}T{self.end_time}:00"

    def has_valid_range(self) -> bool:
        return self.start_timestamp < self.end_timestamp

    def to_payload(self) -> EventPayload:
        return EventPayload(
            title=self.title,
            description=self.description,
            start_date=self.start_timestamp,
            end_date=self.end_timestamp,
            color=self.color,
        )
