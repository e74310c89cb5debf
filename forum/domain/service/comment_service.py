"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.error import NotAuthorizedError, NotFoundError
from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId
from forum.domain.value.types import Username

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_username: Username,
        content: str,
    ) -> Comment:
        """Create a comment on a post.

        The caller is responsible for checking that the post exists.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_username: Author username (denormalized)
            content: Comment text

        Returns:
            Created comment
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
        ):
            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                author_username=author_username,
                content=content,
                votes=0,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created", comment_id=str(saved.id), post_id=str(post_id)
            )
            return saved

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments for a post, newest first."""
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post", post_id=str(post_id), count=len(comments)
            )
            return comments

    async def get_comment_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID
            for_update: Lock the comment row for the rest of the transaction

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(
                comment_id, for_update=for_update
            )
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_owned_comment(
        self, comment_id: CommentId, user_id: UserId
    ) -> Comment:
        """Get a comment the user is allowed to modify.

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user is not the author
        """
        comment = await self.get_comment_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))
        if comment.author_id != user_id:
            logfire.warn(
                "Comment ownership check failed",
                comment_id=str(comment_id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError("comment", str(comment_id), str(user_id))
        return comment

    async def update_content(self, comment_id: CommentId, content: str) -> Comment:
        """Update the text of a comment.

        Raises:
            NotFoundError: If the comment disappeared
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            text_length=len(content),
        ):
            updated = await self.comment_repository.update_content(comment_id, content)
            if not updated:
                raise NotFoundError("Comment", str(comment_id))
            return updated

    async def delete_comment(self, comment_id: CommentId) -> bool:
        """Delete a single comment."""
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            return await self.comment_repository.delete(comment_id)

    async def delete_comments_for_post(self, post_id: PostId) -> int:
        """Delete every comment on a post.

        Returns:
            Number of deleted comments
        """
        with logfire.span(
            "comment_service.delete_comments_for_post", post_id=str(post_id)
        ):
            return await self.comment_repository.delete_by_post(post_id)

    async def set_votes(self, comment_id: CommentId, votes: int) -> Comment | None:
        """Store a recounted vote total on the comment.

        Args:
            comment_id: Comment ID
            votes: Total from the ledger

        Returns:
            Updated comment, None if the comment doesn't exist
        """
        with logfire.span(
            "comment_service.set_votes", comment_id=str(comment_id), votes=votes
        ):
            return await self.comment_repository.set_votes(comment_id, votes)
