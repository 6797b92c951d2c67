"""
Authentication

Provides FastAPI dependencies that resolve the caller identity from a JWT
bearer token. Identity is built from token claims only; no database lookup
is performed.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CallerIdentity:
    """
    The principal making a request.

    An identity without a user_id is anonymous.
    """

    user_id: int | None = None
    email: str = ""
    name: str = ""

    @property
    def is_anonymous(self) -> bool:
        """True when the caller presented no valid credentials."""
        return self.user_id is None

    @classmethod
    def anonymous(cls) -> "CallerIdentity":
        return cls()


def identity_from_token(token: str) -> CallerIdentity:
    """
    Build a caller identity from a raw JWT.

    Invalid, expired or malformed tokens yield the anonymous identity.
    """
    payload = decode_token(token, expected_type="access")
    if payload is None:
        return CallerIdentity.anonymous()

    sub = payload.get("sub")
    if sub is None:
        return CallerIdentity.anonymous()

    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        logger.warning(f"Token subject is not a user id: {sub!r}")
        return CallerIdentity.anonymous()

    return CallerIdentity(
        user_id=user_id,
        email=payload.get("email", ""),
        name=payload.get("name", ""),
    )


async def get_caller_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> CallerIdentity:
    """
    Get the caller identity (never raises).

    Checks for a token in this order:
    1. Authorization: Bearer header
    2. access_token cookie (for browser clients)

    Returns the anonymous identity when no usable token is present, leaving
    the access decision to the endpoint.
    """
    token = None

    if credentials:
        token = credentials.credentials
    elif "access_token" in request.cookies:
        token = request.cookies["access_token"]

    if not token:
        return CallerIdentity.anonymous()

    return identity_from_token(token)


async def get_current_user(
    identity: Annotated[CallerIdentity, Depends(get_caller_identity)],
) -> CallerIdentity:
    """
    Get the caller identity, requiring authentication.

    Raises:
        HTTPException: 401 if the caller is anonymous
    """
    if identity.is_anonymous:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


# Type aliases for dependency injection
Caller = Annotated[CallerIdentity, Depends(get_caller_identity)]
CurrentUser = Annotated[CallerIdentity, Depends(get_current_user)]
