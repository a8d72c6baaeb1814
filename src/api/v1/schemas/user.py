"""Pydantic schemas for user and auth endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Schema for an issued token."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}},
    )

    token: str


class UserResponse(BaseModel):
    """Schema for a user; never includes the password hash."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Alice",
                "email": "a@x.com",
                "avatar_url": "https://www.gravatar.com/avatar/...?s=200&r=pg&d=mm",
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    avatar_url: str | None = None
    created_at: datetime


class UserSummaryResponse(BaseModel):
    """Owner summary embedded in profile responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    avatar_url: str | None = None
