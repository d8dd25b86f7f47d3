from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_serializer, field_validator

from .base import CamelModel
from ..utils.dates import is_future_date, isoformat_utc

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class AppointmentSortField(str, Enum):
    ID = "id"
    TITLE = "title"
    DATE = "date"
    APPOINTMENT_BY = "appointmentBy"
    APPOINTMENT_FOR = "appointmentFor"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class AppointmentCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    date: datetime
    appointment_for: str = Field(..., min_length=1, max_length=255)

    @field_validator("title", "appointment_for")
    @classmethod
    def strip_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Value must not be blank.")
        return normalized

    @field_validator("date")
    @classmethod
    def validate_future_date(cls, value: datetime) -> datetime:
        if not is_future_date(value):
            raise ValueError("Appointment date must be in the future.")
        return value


class AppointmentUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    date: datetime
    appointment_for: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator("title", "appointment_for")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        normalized = value.strip()
        if not normalized:
            raise ValueError("Value must not be blank.")
        return normalized


class AppointmentResponse(CamelModel):
    id: str
    title: str
    date: datetime
    appointment_by: str
    appointment_for: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("date", "created_at", "updated_at", when_used="json")
    def serialize_utc(self, value: Optional[datetime]) -> Optional[str]:
        return isoformat_utc(value)


class AppointmentListParams(CamelModel):
    user_id: str
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    page: int = Field(1, ge=1)
    sort_by: AppointmentSortField = AppointmentSortField.DATE
    sort_dir: SortDirection = SortDirection.ASC


class MessageResponse(CamelModel):
    message: str
