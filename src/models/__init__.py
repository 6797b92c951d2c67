"""User Content Models.

ORM models (database tables):
    from src.models.orm import ContentItem, User

Pydantic contracts (API request/response):
    from src.models.contracts import UserContentResponse

Enums:
    from src.models.enums import AccessDecision
"""

from src.models.contracts import (
    ContentItemCreate,
    ContentItemPublic,
    ErrorResponse,
    HealthResponse,
    UserContentResponse,
)
from src.models.enums import AccessDecision
from src.models.orm import Base, ContentItem, User

__all__ = [
    # ORM
    "Base",
    "ContentItem",
    "User",
    # Contracts
    "ContentItemCreate",
    "ContentItemPublic",
    "ErrorResponse",
    "HealthResponse",
    "UserContentResponse",
    # Enums
    "AccessDecision",
]
