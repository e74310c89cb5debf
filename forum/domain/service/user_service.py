"""User domain service."""

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.domain.value.types import Email, Username

from .base import Service


class UserService(Service):
    """Domain service for user lookups and persistence."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_username(self, username: Username) -> User | None:
        """Get user by username, None if unknown."""
        with logfire.span("user_service.get_user_by_username", username=username.root):
            return await self.user_repository.find_by_username(username)

    async def get_user_by_email(self, email: Email) -> User | None:
        """Get user by email, None if unknown."""
        with logfire.span("user_service.get_user_by_email"):
            return await self.user_repository.find_by_email(email)

    async def save_user(self, user: User) -> User:
        """Persist a user.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span("user_service.save_user", user_id=str(user.id)):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id), username=saved.username.root)
            return saved
