"""Calendar view controller: owns the visible period, the loaded events and
the dialog selection, and talks to the API one request at a time.

Failed requests are logged and leave the view as it was. Fetches are not
cancelled when the period changes again; the last one to finish wins.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterator, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from calendar_app.schemas import EventRead
from calendar_app.ui.client import CalendarApiError, CalendarClient
from calendar_app.ui.form import EventForm
from calendar_app.ui.grid import (
    DayCell,
    fetch_months,
    iter_day_cells,
    month_title,
    shift_month,
    today_reference,
)
from calendar_app.ui.state import DialogMode, InvalidTransition, ViewState, ViewStateMachine

logger = logging.getLogger(__name__)

_REQUEST_ERRORS = (CalendarApiError, httpx.HTTPError)


class CalendarController:
    def __init__(self, client: CalendarClient, *, today: Optional[date] = None) -> None:
        self.client = client
        self.reference = today_reference(today)
        self.events: list[EventRead] = []
        self.selected_day: Optional[date] = None
        self.selected_event: Optional[EventRead] = None
        self.machine = ViewStateMachine()

    @property
    def state(self) -> ViewState:
        return self.machine.state

    @property
    def title(self) -> str:
        return month_title(self.reference)

    def cells(self) -> Iterator[DayCell]:
        return iter_day_cells(self.reference, self.events)

    async def refresh(self) -> bool:
        """Reload events for the visible period. Returns False on failure."""

        self.machine.fetch_start()
        try:
            loaded: list[EventRead] = []
            for year, month in fetch_months(self.reference):
                loaded.extend(await self.client.list_month(year, month))
        except _REQUEST_ERRORS as exc:
            logger.error("Failed to fetch events: %s", exc)
            return False
        else:
            self.events = loaded
            return True
        finally:
            self.machine.fetch_complete()

    async def _navigate(self, reference: date) -> bool:
        if self.state.dialog_open:
            raise InvalidTransition(self.state.phase, "navigate")
        self.reference = reference
        return await self.refresh()

    async def previous_period(self) -> bool:
        return await self._navigate(shift_month(self.reference, -1))

    async def next_period(self) -> bool:
        return await self._navigate(shift_month(self.reference, 1))

    async def go_to_today(self, today: Optional[date] = None) -> bool:
        return await self._navigate(today_reference(today))

    def open_day(self, day: date) -> EventForm:
        self.machine.open_dialog(DialogMode.CREATE)
        self.selected_day = day
        self.selected_event = None
        return EventForm.for_day(day)

    def open_event(self, event: EventRead) -> EventForm:
        self.machine.open_dialog(DialogMode.EDIT)
        self.selected_event = event
        return EventForm.from_event(event)

    def close_dialog(self) -> None:
        self.machine.close_dialog()
        self.selected_event = None

    async def save(self, form: EventForm) -> Optional[EventRead]:
        """Create or update from the open dialog, then reload the period."""

        if not form.has_valid_range():
            logger.warning("End time must be after start time")
            return None

        try:
            payload = form.to_payload()
        except PydanticValidationError as exc:
            logger.warning("Event form is invalid: %s", exc)
            return None

        try:
            if self.state.dialog_mode is DialogMode.EDIT and self.selected_event is not None:
                saved = await self.client.update_event(self.selected_event.id, payload)
            else:
                saved = await self.client.create_event(payload)
        except _REQUEST_ERRORS as exc:
            logger.error("Failed to save event: %s", exc)
            return None

        self.close_dialog()
        await self.refresh()
        return saved

    async def delete(self, event: EventRead) -> bool:
        try:
            await self.client.delete_event(event.id)
        except _REQUEST_ERRORS as exc:
            logger.error("Failed to delete event: %s", exc)
            return False

        if self.state.dialog_open:
            self.close_dialog()
        await self.refresh()
        return True
