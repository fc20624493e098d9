"""Month grid computation for the calendar view.

Weeks start on Sunday. A month is laid out as ``offset`` filler cells taken
from the tail of the previous month, followed by one cell per day.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Iterator, Protocol, Sequence, TypeVar

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Days past the reference date still shown by the view; decides whether a
# second month of events must be fetched.
VISIBLE_SPAN_DAYS = 13


class HasDates(Protocol):
    start_date: str
    end_date: str


E = TypeVar("E", bound=HasDates)


@dataclass(frozen=True)
class MonthLayout:
    first_day: date
    offset: int
    days_in_month: int
    days_in_previous_month: int


@dataclass(frozen=True)
class DayCell:
    day: date
    interactive: bool
    events: Sequence = field(default_factory=tuple)

    @property
    def is_filler(self) -> bool:
        return not self.interactive


def month_layout(reference: date) -> MonthLayout:
    first_day = reference.replace(day=1)
    previous_last = first_day - timedelta(days=1)
    return MonthLayout(
        first_day=first_day,
        # date.weekday() is Monday=0; shift so Sunday=0.
        offset=(first_day.weekday() + 1) % 7,
        days_in_month=calendar.monthrange(first_day.year, first_day.month)[1],
        days_in_previous_month=previous_last.day,
    )


def _calendar_day(timestamp: str) -> date:
    return date.fromisoformat(timestamp.split("T", 1)[0])


def overlaps(event: HasDates, day: date) -> bool:
    """True when ``day`` lies within the event's start and end calendar days."""

    return _calendar_day(event.start_date) <= day <= _calendar_day(event.end_date)


def events_on(day: date, events: Iterable[E]) -> list[E]:
    return [event for event in events if overlaps(event, day)]


def iter_day_cells(reference: date, events: Sequence[E] = ()) -> Iterator[DayCell]:
    layout = month_layout(reference)
    previous_last = layout.first_day - timedelta(days=1)
    for index in range(layout.offset):
        filler = previous_last.replace(
            day=layout.days_in_previous_month - layout.offset + index + 1
        )
        yield DayCell(day=filler, interactive=False)
    for number in range(1, layout.days_in_month + 1):
        day = layout.first_day.replace(day=number)
        yield DayCell(day=day, interactive=True, events=tuple(events_on(day, events)))


def shift_month(reference: date, delta: int) -> date:
    """Move ``reference`` by ``delta`` months, keeping the day of month.

    Days past the end of the target month roll over into the next month,
    so Jan 31 + 1 month is Mar 2 (or Mar 3 outside leap years).
    """

    months = reference.year * 12 + (reference.month - 1) + delta
    year, month = divmod(months, 12)
    first = date(year, month + 1, 1)
    return first + timedelta(days=reference.day - 1)


def today_reference(today: date | None = None) -> date:
    return (today or date.today()).replace(day=1)


def fetch_months(reference: date) -> list[tuple[int, int]]:
    """The (year, month) pairs whose events the view needs for ``reference``."""

    end = reference + timedelta(days=VISIBLE_SPAN_DAYS)
    months = [(reference.year, reference.month)]
    if (end.year, end.month) != months[0]:
        months.append((end.year, end.month))
    return months


def month_title(reference: date) -> str:
    return f"{calendar.month_name[reference.month]} {reference.year}"


__all__ = [
    "DayCell",
    "MonthLayout",
    "WEEKDAY_LABELS",
    "events_on",
    "fetch_months",
    "iter_day_cells",
    "month_layout",
    "month_title",
    "overlaps",
    "shift_month",
    "today_reference",
]
