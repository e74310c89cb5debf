"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.items import MessageResponse
from forum.domain.service import CommentService, VoteService
from forum.domain.value import CommentId, UserId, VotableType


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeleteCommentUseCase:
    """Use case for deleting a comment and its votes."""

    def __init__(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: DeleteCommentRequest) -> MessageResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user doesn't own the comment
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        await self.comment_service.get_owned_comment(comment_id, user_id)

        await self.vote_service.clear_votes(VotableType.COMMENT, [comment_id])
        await self.comment_service.delete_comment(comment_id)

        return MessageResponse(message="Comment deleted successfully")
