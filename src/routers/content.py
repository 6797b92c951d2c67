"""
Content Router

Create and delete content items for the current user. Every change drops
the author's cached content list.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from src.core.auth import CurrentUser
from src.core.database import DbSession
from src.models.contracts.user_content import ContentItemCreate, ContentItemPublic
from src.models.orm.content_item import ContentItem
from src.repositories.content_item import ContentItemRepository
from src.services.cache_tags import CacheTags, user_content_tag

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/content", tags=["content"])


@router.post("", response_model=ContentItemPublic, status_code=status.HTTP_201_CREATED)
async def create_content(
    content_data: ContentItemCreate,
    current_user: CurrentUser,
    db: DbSession,
    cache: CacheTags,
) -> ContentItemPublic:
    """
    Create a content item authored by the current user.

    Args:
        content_data: Content creation data
        current_user: Current authenticated user
        db: Database session
        cache: Tagged response cache

    Returns:
        Created content item
    """
    repo = ContentItemRepository(db)
    item = await repo.create(
        ContentItem(author_id=current_user.user_id, title=content_data.title)
    )
    # Invalidate only after commit
    await db.commit()
    await cache.invalidate_tags([user_content_tag(item.author_id)])

    logger.info(f"Created content {item.id} for user {item.author_id}")
    return ContentItemPublic.model_validate(item)


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content(
    content_id: int,
    current_user: CurrentUser,
    db: DbSession,
    cache: CacheTags,
) -> None:
    """
    Delete a content item owned by the current user.

    Items owned by someone else are reported as not found.

    Args:
        content_id: Content item id
        current_user: Current authenticated user
        db: Database session
        cache: Tagged response cache

    Raises:
        HTTPException: 404 if the item does not exist for this user
    """
    repo = ContentItemRepository(db)
    item = await repo.get_by_id_and_author(content_id, current_user.user_id)  # type: ignore[arg-type]
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Content not found",
        )

    author_id = item.author_id
    await repo.delete(item)
    await db.commit()
    await cache.invalidate_tags([user_content_tag(author_id)])

    logger.info(f"Deleted content {content_id} for user {author_id}")
