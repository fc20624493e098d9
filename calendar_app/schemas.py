# calendar_app/schemas.py
# ------------------------------------------------------------
# Pydantic v2 schemas shared by the API and the client
# ------------------------------------------------------------
from datetime import datetime
import re
from typing import Any, Optional, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError


TITLE_MAX_LENGTH = 100
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"

_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}")


def _check_timestamp(value: Any) -> str:
    if value is None:
        raise PydanticCustomError("date_required", "Date is required")
    if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
        raise PydanticCustomError("date_format", "Invalid date format")
    try:
        datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        raise PydanticCustomError("date_invalid", "Invalid date") from None
    return value


# ============================================================
# Events
# ============================================================

class EventPayload(BaseModel):
    """Body of POST /api/events and PUT /api/events/{id}.

    Every failing field is reported. The end-after-start check runs on
    ``end_date`` whenever both timestamps are valid, whatever happens to the
    other fields.
    """

    title: str
    description: Optional[str] = None
    start_date: str = Field(examples=["2024-03-05T10:00:00"])
    end_date: str = Field(examples=["2024-03-05T11:00:00"])
    color: Optional[str] = Field(default=None, pattern=COLOR_PATTERN, examples=["#1976d2"])

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value: Any) -> str:
        if value is None:
            raise PydanticCustomError("title_required", "Title is required")
        if not isinstance(value, str):
            raise PydanticCustomError("title_type", "Title must be a string")
        trimmed = value.strip()
        if not trimmed:
            raise PydanticCustomError("title_required", "Title is required")
        if len(trimmed) > TITLE_MAX_LENGTH:
            raise PydanticCustomError("title_too_long", "Title is too long")
        # stored as submitted; only the bound is measured on the trimmed text
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _check_dates(cls, value: Any) -> str:
        return _check_timestamp(value)

    @field_validator("end_date")
    @classmethod
    def _check_order(cls, value: str, info: ValidationInfo) -> str:
        start = info.data.get("start_date")
        if start is not None and datetime.strptime(value, TIMESTAMP_FORMAT) <= datetime.strptime(
            start, TIMESTAMP_FORMAT
        ):
            raise PydanticCustomError("date_order", "End date must be after start date")
        return value


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    start_date: str
    end_date: str
    color: str
    created_at: datetime


class ErrorDetail(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[List[ErrorDetail]] = None
    message: Optional[str] = None


class HealthStatus(BaseModel):
    status: str
