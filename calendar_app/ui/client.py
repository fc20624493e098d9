"""
Async HTTP client for the calendar REST API.

Usage:
    async with CalendarClient() as client:
        events = await client.list_month(2024, 3)

Configuration:
    CALENDAR_API_URL sets the base URL (default http://localhost:3001).
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

from calendar_app.schemas import EventPayload, EventRead

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001"


class CalendarApiError(Exception):
    """Raised for any non-success response from the API."""

    def __init__(self, status_code: int, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        error = body.get("error") if isinstance(body, dict) else None
        super().__init__(f"HTTP {status_code}: {error or 'request failed'}")

    @property
    def details(self) -> list:
        if isinstance(self.body, dict):
            return self.body.get("details") or []
        return []


class CalendarClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url or os.getenv("CALENDAR_API_URL", DEFAULT_BASE_URL)
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "CalendarClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self.client.request(method, path, **kwargs)
        if response.is_success:
            return response
        try:
            body = response.json()
        except ValueError:
            body = response.text
        raise CalendarApiError(response.status_code, body)

    async def list_month(self, year: int, month: int) -> list[EventRead]:
        response = await self._request("GET", f"/api/events/{year}/{month:02d}")
        return [EventRead.model_validate(item) for item in response.json()]

    async def get_event(self, event_id: int) -> EventRead:
        response = await self._request("GET", f"/api/events/{event_id}")
        return EventRead.model_validate(response.json())

    async def create_event(self, payload: EventPayload) -> EventRead:
        response = await self._request(
            "POST", "/api/events", json=payload.model_dump(exclude_none=True)
        )
        return EventRead.model_validate(response.json())

    async def update_event(self, event_id: int, payload: EventPayload) -> EventRead:
        response = await self._request(
            "PUT", f"/api/events/{event_id}", json=payload.model_dump(exclude_none=True)
        )
        return EventRead.model_validate(response.json())

    async def delete_event(self, event_id: int) -> None:
        await self._request("DELETE", f"/api/events/{event_id}")

    async def health(self) -> dict[str, Any]:
        response = await self._request("GET", "/health")
        return response.json()
