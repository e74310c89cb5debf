"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.items import CommentItem
from forum.domain.service import CommentService, VoteService
from forum.domain.value import CommentId, UserId, VotableType


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    content: str = Field(min_length=1, max_length=10000)


class UpdateCommentUseCase:
    """Use case for editing a comment."""

    def __init__(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Args:
            request: Update comment request

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user doesn't own the comment
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        await self.comment_service.get_owned_comment(comment_id, user_id)

        updated = await self.comment_service.update_content(
            comment_id, request.content
        )
        user_vote = await self.vote_service.get_user_vote(
            user_id, VotableType.COMMENT, comment_id
        )
        return CommentItem.from_comment(updated, user_vote=user_vote)
