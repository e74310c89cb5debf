"""Get comments use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.items import CommentItem
from forum.domain.service import CommentService, VoteService
from forum.domain.value import PostId, UserId, VotableType


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Viewer ID (if authenticated)


class GetCommentsUseCase:
    """Use case for listing the comments of a post."""

    def __init__(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: GetCommentsRequest) -> list[CommentItem]:
        """Execute get comments flow.

        An unknown post simply has no comments.

        Args:
            request: Get comments request

        Returns:
            Comments newest first, each with the viewer's vote
        """
        with logfire.span("get_comments.execute", post_id=request.post_id):
            comments = await self.comment_service.get_comments_for_post(
                PostId(UUID(request.post_id))
            )

            viewer_id = UserId(UUID(request.user_id)) if request.user_id else None
            annotated = await self.vote_service.list_with_viewer_votes(
                VotableType.COMMENT, comments, viewer_id
            )

            return [
                CommentItem.from_comment(entry.target, user_vote=entry.user_vote)
                for entry in annotated
            ]
