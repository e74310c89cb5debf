"""Test configuration and fixtures."""

import os
from datetime import datetime
from uuid import uuid4

import logfire

# Test defaults, applied before any Settings() is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")

logfire.configure(send_to_logfire=False, console=False)

from forum.domain.model import Comment, Post, User  # noqa: E402
from forum.domain.value import CommentId, PostId, UserId  # noqa: E402
from forum.domain.value.types import Email, Username  # noqa: E402
from forum.util.password import hash_password  # noqa: E402


def make_user(username: str = "alice", password: str = "secret123") -> User:
    """Build a user with a real (cheap) bcrypt hash."""
    return User(
        id=UserId(uuid4()),
        username=Username(root=username),
        email=Email(root=f"{username}@example.com"),
        password_hash=hash_password(password, rounds=4),
        created_at=datetime.now(),
    )


def make_post(
    author: User | None = None,
    title: str = "Test Post",
    content: str = "Test content",
    votes: int = 0,
    created_at: datetime | None = None,
) -> Post:
    """Build a post, authored by a throwaway user unless one is given."""
    author = author or make_user("author")
    created_at = created_at or datetime.now()
    return Post(
        id=PostId(uuid4()),
        title=title,
        content=content,
        author_id=author.id,
        author_username=author.username,
        votes=votes,
        created_at=created_at,
        updated_at=created_at,
    )


def make_comment(
    post: Post,
    author: User | None = None,
    content: str = "Test comment",
    votes: int = 0,
    created_at: datetime | None = None,
) -> Comment:
    """Build a comment on ``post``."""
    author = author or make_user("commenter")
    created_at = created_at or datetime.now()
    return Comment(
        id=CommentId(uuid4()),
        post_id=post.id,
        author_id=author.id,
        author_username=author.username,
        content=content,
        votes=votes,
        created_at=created_at,
        updated_at=created_at,
    )
