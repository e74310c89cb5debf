"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.items import PostItem
from forum.domain.error import NotFoundError
from forum.domain.service import PostService, VoteService
from forum.domain.value import PostId, UserId, VotableType


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Viewer ID (if authenticated)


class GetPostUseCase:
    """Use case for fetching a single post."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Execute get post flow.

        Args:
            request: Get post request

        Returns:
            The post with the viewer's own vote

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.post_service.get_post_by_id(PostId(UUID(request.post_id)))
        if not post:
            raise NotFoundError("Post", request.post_id)

        viewer_id = UserId(UUID(request.user_id)) if request.user_id else None
        [annotated] = await self.vote_service.list_with_viewer_votes(
            VotableType.POST, [post], viewer_id
        )
        return PostItem.from_post(post, user_vote=annotated.user_vote)
