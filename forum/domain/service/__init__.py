"""Domain services."""

from .auth_service import AuthService
from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .post_service import PostService
from .user_service import UserService
from .vote_service import ViewerVote, VoteOutcome, VoteService

__all__ = [
    "AuthService",
    "CommentService",
    "JWTService",
    "PostService",
    "Service",
    "UserService",
    "ViewerVote",
    "VoteOutcome",
    "VoteService",
]
