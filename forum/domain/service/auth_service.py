"""Authentication domain service.

Username/password registration and login. Tokens are issued by
:class:`JWTService`; this service only deals with credentials.
"""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from forum.config import AuthSettings
from forum.domain.error import ConflictError, InvalidCredentialsError
from forum.domain.model import User
from forum.domain.value import UserId
from forum.domain.value.types import Email, Username
from forum.util.password import hash_password, verify_password

from .base import Service
from .user_service import UserService


class AuthService(Service):
    """Domain service for credential-based authentication."""

    def __init__(self, user_service: UserService, auth_settings: AuthSettings) -> None:
        """Initialize auth service.

        Args:
            user_service: User domain service
            auth_settings: Authentication settings (bcrypt cost)
        """
        self.user_service = user_service
        self.auth_settings = auth_settings

    async def register(self, username: Username, email: Email, password: str) -> User:
        """Create a new account.

        Args:
            username: Desired username
            email: Email address
            password: Plain-text password

        Returns:
            The created user

        Raises:
            ConflictError: If the username or email is already taken
        """
        with logfire.span("auth_service.register", username=username.root):
            if await self.user_service.get_user_by_username(username):
                logfire.warn("Username already taken", username=username.root)
                raise ConflictError("Username already exists")

            if await self.user_service.get_user_by_email(email):
                logfire.warn("Email already registered", username=username.root)
                raise ConflictError("Email already exists")

            user = User(
                id=UserId(uuid4()),
                username=username,
                email=email,
                password_hash=hash_password(password, self.auth_settings.bcrypt_rounds),
                created_at=datetime.now(),
            )

            try:
                return await self.user_service.save_user(user)
            except IntegrityError:
                # Lost a race with a concurrent registration
                logfire.warn("Concurrent registration conflict", username=username.root)
                raise ConflictError("Username or email already exists")

    async def authenticate(self, username: Username, password: str) -> User:
        """Check a username/password pair.

        Args:
            username: Username
            password: Plain-text password

        Returns:
            The matching user

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
        """
        with logfire.span("auth_service.authenticate", username=username.root):
            user = await self.user_service.get_user_by_username(username)
            if not user or not verify_password(password, user.password_hash):
                logfire.warn("Login rejected", username=username.root)
                raise InvalidCredentialsError()

            logfire.info("Login accepted", user_id=str(user.id))
            return user
