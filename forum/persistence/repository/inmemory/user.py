"""In-memory user repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId
from forum.domain.value.types import Email, Username


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def save(self, user: User) -> User:
        """Insert a user.

        Raises:
            IntegrityError: If the username or email is taken
        """
        for existing in self._users.values():
            if existing.id == user.id:
                continue
            if existing.username == user.username or existing.email == user.email:
                raise IntegrityError("Duplicate user", None, Exception())

        self._users[user.id] = user
        return user
