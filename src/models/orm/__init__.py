"""SQLAlchemy ORM Models for User Content.

Pure database models using SQLAlchemy 2.0 declarative style.
"""

from src.models.orm.base import Base
from src.models.orm.content_item import ContentItem
from src.models.orm.user import User

__all__ = [
    "Base",
    "ContentItem",
    "User",
]
