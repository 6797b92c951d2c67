"""Pydantic contracts (API request/response schemas)."""

from src.models.contracts.common import (
    ErrorResponse,
    HealthResponse,
)
from src.models.contracts.user_content import (
    ContentItemCreate,
    ContentItemPublic,
    UserContentResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # User content
    "ContentItemCreate",
    "ContentItemPublic",
    "UserContentResponse",
]
