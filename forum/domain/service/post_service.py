"""Post domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.error import NotAuthorizedError, NotFoundError
from forum.domain.model.post import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId
from forum.domain.value.types import Username

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        title: str,
        content: str,
        author_id: UserId,
        author_username: Username,
    ) -> Post:
        """Create a post with an empty vote total.

        Args:
            title: Post title
            content: Post body
            author_id: Author user ID
            author_username: Author username (denormalized)

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author_id), title=title
        ):
            now = datetime.now()
            post = Post(
                id=PostId(uuid4()),
                title=title,
                content=content,
                author_id=author_id,
                author_username=author_username,
                votes=0,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID
            for_update: Lock the post row for the rest of the transaction

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id, for_update=for_update)

            if not post:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def list_posts(self, limit: int = 30, offset: int = 0) -> list[Post]:
        """List posts newest first."""
        with logfire.span("post_service.list_posts", limit=limit, offset=offset):
            return await self.post_repository.find_all(limit=limit, offset=offset)

    async def get_owned_post(self, post_id: PostId, user_id: UserId) -> Post:
        """Get a post the user is allowed to modify.

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is not the author
        """
        post = await self.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))
        if post.author_id != user_id:
            logfire.warn(
                "Post ownership check failed",
                post_id=str(post_id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError("post", str(post_id), str(user_id))
        return post

    async def update_content(self, post_id: PostId, title: str, content: str) -> Post:
        """Update title and content of a post.

        Raises:
            NotFoundError: If the post disappeared
        """
        with logfire.span("post_service.update_content", post_id=str(post_id)):
            updated = await self.post_repository.update_content(post_id, title, content)
            if not updated:
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post content updated", post_id=str(post_id))
            return updated

    async def delete_post(self, post_id: PostId) -> bool:
        """Delete a post row.

        Returns:
            True if a post was deleted
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            deleted = await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id), deleted=deleted)
            return deleted

    async def set_votes(self, post_id: PostId, votes: int) -> Post | None:
        """Store a recounted vote total on the post.

        Args:
            post_id: Post ID
            votes: Total from the ledger

        Returns:
            Updated post, None if the post doesn't exist
        """
        with logfire.span("post_service.set_votes", post_id=str(post_id), votes=votes):
            return await self.post_repository.set_votes(post_id, votes)
