"""Vote entity.

Votes are the ledger behind every post and comment score.
Each user holds at most one vote per item, pointing up or down.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VotableType, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Represents one user's up- or downvote on a post or comment.
    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - A retracted vote is deleted, never stored as zero
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    vote_type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)
