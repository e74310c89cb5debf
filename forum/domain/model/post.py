"""Post aggregate root.

Posts are the primary content type: a title and a body shared by a user.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import PostId, UserId
from forum.domain.value.types import Username


class Post(DomainModel):
    """Post aggregate root.

    ``votes`` is a cache of the vote ledger (upvotes minus downvotes).
    It is only ever overwritten by a full recount, and recounting does
    not move ``updated_at``, so voting never makes a post look edited.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    author_id: UserId
    author_username: Username
    votes: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
