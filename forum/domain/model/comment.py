"""Comment entity.

Comments are flat replies attached to a post.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, PostId, UserId
from forum.domain.value.types import Username


class Comment(DomainModel):
    """Comment entity.

    Carries its own denormalized ``votes`` total, maintained the same
    way as a post's: recomputed from the ledger on every vote.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_username: Username
    content: str = Field(min_length=1, max_length=10000)
    votes: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
