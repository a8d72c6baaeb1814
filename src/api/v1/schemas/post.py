"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    text: str = Field(..., min_length=1, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    text: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(BaseModel):
    """Schema for a like."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID


class CommentResponse(BaseModel):
    """Schema for a comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar_url: str | None = None
    date: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "text": "hi",
                "name": "Alice",
                "avatar_url": None,
                "date": "2026-01-28T10:00:00",
                "likes": [],
                "comments": [],
            }
        },
    )

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar_url: str | None = None
    date: datetime
    likes: list[LikeResponse]
    comments: list[CommentResponse]
