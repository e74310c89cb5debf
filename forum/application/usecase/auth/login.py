"""Login use case."""

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.auth.register import AuthResponse
from forum.application.usecase.items import UserInfo
from forum.domain.error import InvalidCredentialsError
from forum.domain.service import AuthService, JWTService
from forum.domain.value.types import Username


class LoginRequest(BaseModel):
    """Username/password login request."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginUseCase:
    """Use case for username/password login."""

    def __init__(self, auth_service: AuthService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> AuthResponse:
        """Execute login flow.

        Args:
            request: Login request

        Returns:
            The user and a fresh token

        Raises:
            InvalidCredentialsError: If the credentials don't match an account
        """
        with logfire.span("login.execute", username=request.username):
            try:
                username = Username(request.username)
            except ValueError:
                # A name that could never be registered can't log in either
                raise InvalidCredentialsError()

            user = await self.auth_service.authenticate(username, request.password)
            token = self.jwt_service.create_token(str(user.id), user.username.root)
            return AuthResponse(user=UserInfo.from_user(user), token=token)
