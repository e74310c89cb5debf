"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject

# Requested vote values: 0 means "retract whatever vote I had"
NEUTRAL_VOTE = 0
VOTE_INTENTS = frozenset({-1, NEUTRAL_VOTE, 1})


class VoteType(IntEnum):
    """Direction of a ledger vote.

    Only nonzero directions are ever stored; retracting a vote deletes
    the ledger row instead of storing a zero.
    """

    DOWN = -1
    UP = 1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class Username(RootValueObject[str]):
    """Unique login name chosen at registration.

    Letters, digits, underscores, dots and hyphens, 1-50 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        v = v.strip()
        if not re.match(r"^[A-Za-z0-9_.-]{1,50}$", v):
            raise ValueError(
                "Username must be 1-50 characters of letters, digits, '_', '.' or '-'"
            )
        return v


class Email(RootValueObject[str]):
    """Email address used for account lookup."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email shape and normalize case."""
        v = v.strip().lower()
        if len(v) > 255 or not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", v):
            raise ValueError("Invalid email address")
        return v
