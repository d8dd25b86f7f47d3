from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_serializer, field_validator

from .base import CamelModel
from ..utils.dates import isoformat_utc


class UserCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)
    phone_number: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserLogin(CamelModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class UserResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    is_active: bool
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at", when_used="json")
    def serialize_utc(self, value: Optional[datetime]) -> Optional[str]:
        return isoformat_utc(value)


class LoginResponse(CamelModel):
    id: str
    name: str
    access_token: str
    refresh_token: str
