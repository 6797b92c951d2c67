"""
Cache Tag Service.

Tagged response cache in Redis. Each cached response is indexed under one
or more cache tags; invalidating a tag removes every response indexed under
it, from any API instance.

Every tag also carries a generation counter. Entry keys embed the
generations read before the underlying data was queried, and invalidation
bumps the counter first. A response computed before an invalidation is
therefore stored under a key no later reader will look up.

The cache is an optimization only. Redis failures and unreadable entries
are logged and treated as a miss (reads) or a no-op (writes and
invalidation).
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends
from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.config import get_settings
from src.core.cache import get_redis

logger = logging.getLogger(__name__)

USER_CONTENT_TAG = "user_content:{user_id}"
USER_CONTENT_RESPONSE_KEY = "user_content_response:{user_id}"
CACHE_ENTRY_KEY = "cache:entry:{key}:v{version}"
CACHE_TAG_KEY = "cache:tag:{tag}"
CACHE_GENERATION_KEY = "cache:gen:{tag}"
DEFAULT_CACHE_TTL = 300  # 5 minutes


def user_content_tag(user_id: int) -> str:
    """Cache tag covering every response built from a user's content."""
    return USER_CONTENT_TAG.format(user_id=user_id)


def user_content_response_key(user_id: int) -> str:
    """Cache key for the recent content response of a user."""
    return USER_CONTENT_RESPONSE_KEY.format(user_id=user_id)


@dataclass(frozen=True)
class CacheSlot:
    """
    A cache key pinned to the tag generations current when it was opened.

    entry_key is None when the generations could not be read; such a slot
    never hits and never stores.
    """

    key: str
    tags: tuple[str, ...]
    entry_key: str | None


class CacheTagService:
    """Service for storing and invalidating tagged responses in Redis."""

    def __init__(self, redis: Redis, default_ttl: int = DEFAULT_CACHE_TTL) -> None:
        self.redis = redis
        self.default_ttl = default_ttl

    async def open_slot(self, key: str, tags: Iterable[str]) -> CacheSlot:
        """
        Resolve the versioned entry key for a response.

        Must be called before the data behind the response is read.
        """
        tags = tuple(tags)
        if not tags:
            return CacheSlot(key, tags, CACHE_ENTRY_KEY.format(key=key, version="0"))

        try:
            generations = await self.redis.mget(
                [CACHE_GENERATION_KEY.format(tag=tag) for tag in tags]
            )
        except RedisError as e:
            logger.warning(f"Cache generation read failed for {key}: {e}")
            return CacheSlot(key, tags, None)

        version = ".".join(str(int(generation or 0)) for generation in generations)
        return CacheSlot(key, tags, CACHE_ENTRY_KEY.format(key=key, version=version))

    async def get(self, slot: CacheSlot) -> dict[str, Any] | None:
        """Get a cached payload, or None on miss."""
        if slot.entry_key is None:
            return None

        try:
            raw = await self.redis.get(slot.entry_key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {slot.key}: {e}")
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Ignoring unreadable cache entry {slot.entry_key}: {e}")
            return None

    async def store(
        self,
        slot: CacheSlot,
        payload: dict[str, Any],
        ttl: int | None = None,
    ) -> None:
        """
        Cache a payload and index it under each of the slot's tags.

        Tag sets share the entry TTL so they never outlive what they index
        by more than one TTL.
        """
        if slot.entry_key is None:
            return

        ttl = ttl if ttl is not None else self.default_ttl

        try:
            await self.redis.setex(slot.entry_key, ttl, json.dumps(payload))
            for tag in slot.tags:
                tag_key = CACHE_TAG_KEY.format(tag=tag)
                await self.redis.sadd(tag_key, slot.entry_key)
                await self.redis.expire(tag_key, ttl)
        except RedisError as e:
            logger.warning(f"Cache write failed for {slot.key}: {e}")

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        """
        Bump each tag's generation and remove the payloads indexed under it.

        Returns:
            Number of cached entries removed
        """
        removed = 0
        for tag in tags:
            tag_key = CACHE_TAG_KEY.format(tag=tag)
            try:
                await self.redis.incr(CACHE_GENERATION_KEY.format(tag=tag))
                entry_keys = await self.redis.smembers(tag_key)
                if entry_keys:
                    removed += await self.redis.delete(*entry_keys)
                await self.redis.delete(tag_key)
            except RedisError as e:
                logger.warning(f"Cache invalidation failed for tag {tag}: {e}")
                continue
            logger.info(f"Invalidated cache tag {tag}")
        return removed


async def get_cache_tag_service() -> CacheTagService:
    """Factory function for CacheTagService on the shared Redis client."""
    settings = get_settings()
    return CacheTagService(await get_redis(), default_ttl=settings.cache_ttl_seconds)


CacheTags = Annotated[CacheTagService, Depends(get_cache_tag_service)]
