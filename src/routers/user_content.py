"""
User Content Router

Lists the most recent content ids authored by a user. Only the user
themselves may read the list.
"""

import logging

from fastapi import APIRouter, Response
from pydantic import ValidationError as PydanticValidationError

from src.core.auth import Caller
from src.models.contracts.common import ErrorResponse
from src.models.contracts.user_content import UserContentResponse
from src.services.cache_tags import CacheTags, user_content_response_key, user_content_tag
from src.services.user_content import UserContentServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user-content", tags=["user-content"])


@router.get(
    "/{user_id}",
    response_model=UserContentResponse,
    responses={403: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def get_user_content(
    user_id: int,
    caller: Caller,
    service: UserContentServiceDep,
    cache: CacheTags,
    response: Response,
) -> UserContentResponse:
    """
    Get the user's most recently created content ids, newest first.

    The cache is consulted only after the caller is authorized, so a cached
    list is never served to anyone but its owner. The cache slot is opened
    before the query, so a write committed in between leaves this response
    unreachable.

    Args:
        user_id: Author user id
        caller: Caller identity (may be anonymous)
        service: User content service
        cache: Tagged response cache
        response: Outgoing response (for cache headers)

    Returns:
        Up to 50 content ids

    Raises:
        UserContentAccessDenied: Caller is anonymous or not the requested user
    """
    service.require_access(caller, user_id)

    tag = user_content_tag(user_id)
    response.headers["Cache-Tag"] = tag
    response.headers["Cache-Control"] = "private"

    slot = await cache.open_slot(user_content_response_key(user_id), [tag])
    cached = await cache.get(slot)
    if cached is not None:
        try:
            hit = UserContentResponse.model_validate(cached)
        except PydanticValidationError:
            logger.warning(f"Ignoring malformed cached content list for user {user_id}")
        else:
            response.headers["X-Cache"] = "HIT"
            return hit

    content_ids = await service.fetch_recent_content_ids(user_id)
    payload = UserContentResponse(data=content_ids)
    await cache.store(slot, payload.model_dump())

    response.headers["X-Cache"] = "MISS"
    return payload
