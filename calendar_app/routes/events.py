"""REST endpoints for calendar events."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from calendar_app.database import get_db
from calendar_app.schemas import ErrorResponse, EventPayload, EventRead
from calendar_app.services.event_service import EventService

router = APIRouter(prefix="/api/events", tags=["events"])

_VALIDATION = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


async def get_event_service(db: AsyncSession = Depends(get_db)) -> EventService:
    return EventService.for_session(db)


@router.get("/{year}/{month}", response_model=List[EventRead], responses=_VALIDATION)
async def list_month(
    year: str, month: str, service: EventService = Depends(get_event_service)
) -> List[EventRead]:
    events = await service.list_by_month(year, month)
    return [EventRead.model_validate(event) for event in events]


@router.get("/{event_id}", response_model=EventRead, responses=_NOT_FOUND)
async def get_event(
    event_id: int, service: EventService = Depends(get_event_service)
) -> EventRead:
    return EventRead.model_validate(await service.get(event_id))


@router.post(
    "",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    responses=_VALIDATION,
)
async def create_event(
    payload: EventPayload, service: EventService = Depends(get_event_service)
) -> EventRead:
    return EventRead.model_validate(await service.create(payload))


@router.put("/{event_id}", response_model=EventRead, responses={**_VALIDATION, **_NOT_FOUND})
async def update_event(
    event_id: int,
    payload: EventPayload,
    service: EventService = Depends(get_event_service),
) -> EventRead:
    return EventRead.model_validate(await service.update(event_id, payload))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND)
async def delete_event(
    event_id: int, service: EventService = Depends(get_event_service)
) -> Response:
    await service.delete(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
