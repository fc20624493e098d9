from fastapi import APIRouter

from calendar_app.schemas import HealthStatus

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(status="healthy")
