"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    CommentId,
    PostId,
    UserId,
    VoteId,
)
from forum.domain.value.types import (
    NEUTRAL_VOTE,
    VOTE_INTENTS,
    Email,
    Username,
    VotableType,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "Email",
    "Username",
    "VoteType",
    "VotableType",
    "NEUTRAL_VOTE",
    "VOTE_INTENTS",
]
