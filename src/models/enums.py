"""
Enums for User Content models.
"""

from enum import Enum


class AccessDecision(str, Enum):
    """Outcome of an access check."""

    ALLOWED = "allowed"
    DENIED = "denied"

    @property
    def is_allowed(self) -> bool:
        return self is AccessDecision.ALLOWED
