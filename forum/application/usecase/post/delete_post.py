"""Delete post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.items import MessageResponse
from forum.domain.service import CommentService, PostService, VoteService
from forum.domain.value import PostId, UserId, VotableType


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeletePostUseCase:
    """Use case for deleting a post with its comments and votes."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: DeletePostRequest) -> MessageResponse:
        """Execute delete post flow.

        Ledger rows don't reference their target by foreign key, so the
        votes on the post and on each of its comments are removed here.

        Args:
            request: Delete post request

        Returns:
            Confirmation message

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If user doesn't own the post
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id))

        with logfire.span("delete_post.execute", post_id=request.post_id):
            await self.post_service.get_owned_post(post_id, user_id)

            comments = await self.comment_service.get_comments_for_post(post_id)
            await self.vote_service.clear_votes(
                VotableType.COMMENT, [c.id for c in comments]
            )
            await self.vote_service.clear_votes(VotableType.POST, [post_id])
            await self.comment_service.delete_comments_for_post(post_id)
            await self.post_service.delete_post(post_id)

            return MessageResponse(message="Post deleted successfully")
