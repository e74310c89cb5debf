"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.items import CommentItem
from forum.domain.error import NotFoundError
from forum.domain.service import CommentService, PostService, UserService
from forum.domain.value import PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str = Field(min_length=1, max_length=10000)
    author_id: str  # User ID from authenticated user


class CreateCommentUseCase:
    """Use case for commenting on a post."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The new comment with zero votes

        Raises:
            NotFoundError: If the post or the author doesn't exist
        """
        post_id = PostId(UUID(request.post_id))

        # Verify post exists
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        comment = await self.comment_service.create_comment(
            post_id=post.id,
            author_id=author.id,
            author_username=author.username,
            content=request.content,
        )
        return CommentItem.from_comment(comment)
