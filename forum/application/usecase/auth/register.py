"""Register use case."""

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.base import CamelModel
from forum.application.usecase.items import UserInfo
from forum.domain.service import AuthService, JWTService
from forum.domain.value.types import Email, Username


class RegisterRequest(BaseModel):
    """Registration request."""

    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)


class AuthResponse(CamelModel):
    """Authenticated session: the account and its bearer token."""

    user: UserInfo
    token: str


class RegisterUseCase:
    """Use case for creating an account and signing it in."""

    def __init__(self, auth_service: AuthService, jwt_service: JWTService) -> None:
        """Initialize register use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> AuthResponse:
        """Execute registration flow.

        Args:
            request: Registration request

        Returns:
            The new user and a token for it

        Raises:
            ValueError: If the username or email is malformed
            ConflictError: If the username or email is taken
        """
        with logfire.span("register.execute", username=request.username):
            user = await self.auth_service.register(
                username=Username(request.username),
                email=Email(request.email),
                password=request.password,
            )

            token = self.jwt_service.create_token(str(user.id), user.username.root)
            return AuthResponse(user=UserInfo.from_user(user), token=token)
