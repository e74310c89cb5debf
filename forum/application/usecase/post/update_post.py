"""Update post use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.items import PostItem
from forum.domain.service import PostService, VoteService
from forum.domain.value import PostId, UserId, VotableType


class UpdatePostRequest(BaseModel):
    """Update post request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)


class UpdatePostUseCase:
    """Use case for editing a post's title and content."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: UpdatePostRequest) -> PostItem:
        """Execute update post flow.

        Args:
            request: Update post request with post ID, user ID and new content

        Returns:
            Updated post details

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If user doesn't own the post
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id))

        await self.post_service.get_owned_post(post_id, user_id)

        updated = await self.post_service.update_content(
            post_id, request.title, request.content
        )
        user_vote = await self.vote_service.get_user_vote(
            user_id, VotableType.POST, post_id
        )
        return PostItem.from_post(updated, user_vote=user_vote)
