"""Create post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.items import PostItem
from forum.domain.service import PostService, UserService
from forum.domain.value import UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    author_id: str  # UUID string of the authenticated user


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            The new post with zero votes

        Raises:
            NotFoundError: If the author's account no longer exists
        """
        with logfire.span("create_post.execute", author_id=request.author_id):
            author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

            post = await self.post_service.create_post(
                title=request.title,
                content=request.content,
                author_id=author.id,
                author_username=author.username,
            )

            return PostItem.from_post(post)
