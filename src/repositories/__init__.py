"""Data access repositories."""

from src.repositories.content_item import ContentItemRepository

__all__ = [
    "ContentItemRepository",
]
