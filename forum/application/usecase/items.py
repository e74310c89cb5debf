"""Response items shared by post, comment and vote use cases."""

from datetime import datetime

from forum.application.usecase.base import CamelModel
from forum.domain.model import Comment, Post, User


class UserInfo(CamelModel):
    """Public view of an account."""

    id: str
    username: str
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            username=user.username.root,
            email=user.email.root,
            created_at=user.created_at,
        )


class PostItem(CamelModel):
    """Post as seen by one viewer.

    ``votes`` is the global total; ``user_vote`` is the viewer's own
    vote (-1, 0 or 1).
    """

    id: str
    title: str
    content: str
    author_id: str
    author_username: str
    votes: int
    user_vote: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post, user_vote: int = 0) -> "PostItem":
        return cls(
            id=str(post.id),
            title=post.title,
            content=post.content,
            author_id=str(post.author_id),
            author_username=post.author_username.root,
            votes=post.votes,
            user_vote=user_vote,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class CommentItem(CamelModel):
    """Comment as seen by one viewer."""

    id: str
    post_id: str
    author_id: str
    author_username: str
    content: str
    votes: int
    user_vote: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment, user_vote: int = 0) -> "CommentItem":
        return cls(
            id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author_username=comment.author_username.root,
            content=comment.content,
            votes=comment.votes,
            user_vote=user_vote,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str
