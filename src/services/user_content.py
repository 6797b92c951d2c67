"""
User Content Service

Guarded read of a user's most recent content ids. Callers may only list
their own content; anonymous and mismatched callers get the same denial.
"""

import logging
from dataclasses import dataclass, field
from typing import Annotated, Literal, Protocol

from fastapi import Depends

from src.config import get_settings
from src.core.auth import CallerIdentity
from src.core.database import DbSession
from src.models.enums import AccessDecision
from src.repositories.content_item import ContentItemRepository
from src.services.cache_tags import user_content_tag

logger = logging.getLogger(__name__)

RECENT_CONTENT_LIMIT = 50


class ContentStore(Protocol):
    """Queryable collection of content items."""

    async def query_by_author(
        self,
        author_id: int,
        *,
        sort_key: Literal["created_at"] = "created_at",
        sort_dir: Literal["asc", "desc"] = "desc",
        limit: int = RECENT_CONTENT_LIMIT,
    ) -> list[int]: ...


class UserContentAccessDenied(Exception):
    """
    Raised when a caller may not read a user's content.

    Covers both anonymous callers and callers asking for another user's
    content. The two cases are not distinguished.
    """

    def __init__(self, target_user_id: int):
        super().__init__("Access denied")
        self.target_user_id = target_user_id


@dataclass(frozen=True)
class UserContentResult:
    """Content ids for a user plus the cache tags the response depends on."""

    user_id: int
    content_ids: list[int]
    cache_tags: list[str] = field(default_factory=list)


def authorize_request(caller: CallerIdentity, target_user_id: int) -> AccessDecision:
    """Allow only an authenticated caller reading their own content."""
    if caller.is_anonymous:
        return AccessDecision.DENIED
    if caller.user_id != target_user_id:
        return AccessDecision.DENIED
    return AccessDecision.ALLOWED


class UserContentService:
    """Service for listing a user's most recent content."""

    def __init__(self, store: ContentStore, limit: int = RECENT_CONTENT_LIMIT):
        self.store = store
        self.limit = min(limit, RECENT_CONTENT_LIMIT)

    def authorize_request(self, caller: CallerIdentity, target_user_id: int) -> AccessDecision:
        return authorize_request(caller, target_user_id)

    def require_access(self, caller: CallerIdentity, target_user_id: int) -> None:
        """
        Authorize the caller, logging and raising on denial.

        Raises:
            UserContentAccessDenied: If the caller may not read this content
        """
        if not self.authorize_request(caller, target_user_id).is_allowed:
            logger.info(
                f"Denied user content for user {target_user_id} "
                f"(caller: {caller.user_id if not caller.is_anonymous else 'anonymous'})"
            )
            raise UserContentAccessDenied(target_user_id)

    async def fetch_recent_content_ids(self, target_user_id: int) -> list[int]:
        """
        Get the most recently created content ids authored by a user.

        Assumes the caller has already been authorized. Store errors are
        propagated unchanged.

        Args:
            target_user_id: Author user id

        Returns:
            Up to `limit` content ids, newest first
        """
        return await self.store.query_by_author(
            target_user_id,
            sort_key="created_at",
            sort_dir="desc",
            limit=self.limit,
        )

    async def get_user_content(
        self, caller: CallerIdentity, target_user_id: int
    ) -> UserContentResult:
        """
        Authorize, then fetch the target user's recent content.

        Raises:
            UserContentAccessDenied: If the caller may not read this content.
                The store is not queried in that case.
        """
        self.require_access(caller, target_user_id)

        content_ids = await self.fetch_recent_content_ids(target_user_id)
        return UserContentResult(
            user_id=target_user_id,
            content_ids=content_ids,
            cache_tags=[user_content_tag(target_user_id)],
        )


def get_user_content_service(db: DbSession) -> UserContentService:
    """Factory function for UserContentService backed by the database."""
    settings = get_settings()
    return UserContentService(ContentItemRepository(db), limit=settings.recent_content_limit)


UserContentServiceDep = Annotated[UserContentService, Depends(get_user_content_service)]
