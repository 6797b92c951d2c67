"""
Content Item Repository

SQLAlchemy implementation of the content store used by UserContentService.
"""

from typing import Literal

from sqlalchemy import Select, asc, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.orm.content_item import ContentItem
from src.repositories.base import BaseRepository

SortKey = Literal["created_at"]
SortDir = Literal["asc", "desc"]


class ContentItemRepository(BaseRepository[ContentItem]):
    """Repository for ContentItem model operations."""

    model = ContentItem

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    @staticmethod
    def build_author_query(
        author_id: int,
        *,
        sort_key: SortKey = "created_at",
        sort_dir: SortDir = "desc",
        limit: int = 50,
    ) -> Select[tuple[int]]:
        """
        Build the id-only query for an author's content.

        Rows sharing a sort value are ordered by id in the same direction so
        the result is stable across executions.
        """
        order_func = desc if sort_dir == "desc" else asc
        return (
            select(ContentItem.id)
            .where(ContentItem.author_id == author_id)
            .order_by(order_func(getattr(ContentItem, sort_key)), order_func(ContentItem.id))
            .limit(limit)
        )

    async def query_by_author(
        self,
        author_id: int,
        *,
        sort_key: SortKey = "created_at",
        sort_dir: SortDir = "desc",
        limit: int = 50,
    ) -> list[int]:
        """
        Get content ids authored by a user.

        Args:
            author_id: Author user id
            sort_key: Column to sort by
            sort_dir: Sort direction ("asc" or "desc")
            limit: Maximum number of results

        Returns:
            Content ids in sorted order
        """
        result = await self.session.execute(
            self.build_author_query(
                author_id, sort_key=sort_key, sort_dir=sort_dir, limit=limit
            )
        )
        return list(result.scalars().all())

    async def get_by_id_and_author(self, id: int, author_id: int) -> ContentItem | None:
        """
        Get content item by ID, scoped to its author.

        Args:
            id: Content item id
            author_id: Author user id

        Returns:
            ContentItem or None if not found or owned by someone else
        """
        result = await self.session.execute(
            select(ContentItem).where(
                ContentItem.id == id,
                ContentItem.author_id == author_id,
            )
        )
        return result.scalar_one_or_none()
