"""
User content contracts (API request/response schemas).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserContentResponse(BaseModel):
    """Most recent content ids for a user, newest first."""

    data: list[int] = Field(
        default_factory=list, description="Content item ids ordered by creation time, newest first"
    )


class ContentItemCreate(BaseModel):
    """Content item creation request model."""

    title: str = Field(..., min_length=1, max_length=255, description="Content title")


class ContentItemPublic(BaseModel):
    """Content item public response model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    title: str
    created_at: datetime
