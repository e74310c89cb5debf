"""Cast vote use case."""

from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.items import CommentItem, PostItem
from forum.domain.model import Post
from forum.domain.service import VoteService
from forum.domain.value import CommentId, PostId, UserId, VotableType


class CastVoteRequest(BaseModel):
    """Cast vote request.

    ``vote_type`` is the absolute state the user wants: 1 up, -1 down,
    0 to retract.
    """

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    vote_type: Literal[-1, 0, 1]


class CastVoteUseCase:
    """Use case for voting on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> PostItem | CommentItem:
        """Execute vote flow.

        Args:
            request: Cast vote request

        Returns:
            The voted item with its recounted ``votes`` and the caller's ``user_vote``

        Raises:
            NotFoundError: If the item doesn't exist
            VoteConflictError: If concurrent writes keep colliding
        """
        user_id = UserId(UUID(request.user_id))

        if request.votable_type == VotableType.POST:
            votable_id: PostId | CommentId = PostId(UUID(request.votable_id))
        else:
            votable_id = CommentId(UUID(request.votable_id))

        outcome = await self.vote_service.apply_vote(
            votable_type=request.votable_type,
            votable_id=votable_id,
            user_id=user_id,
            vote_type=request.vote_type,
        )

        logfire.info(
            "Vote cast",
            votable_type=request.votable_type.value,
            votable_id=request.votable_id,
            votes=outcome.votes,
        )

        if isinstance(outcome.target, Post):
            return PostItem.from_post(outcome.target, user_vote=outcome.user_vote)
        return CommentItem.from_comment(outcome.target, user_vote=outcome.user_vote)
