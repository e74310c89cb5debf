"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import ValidationError

from forum.application.usecase.auth import (
    AuthResponse,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from forum.application.usecase.items import MessageResponse, UserInfo
from forum.config import Settings
from forum.domain.error import ConflictError, InvalidCredentialsError, NotFoundError
from forum.interface.api.security import get_auth_token
from forum.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


def _set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the JWT as an HTTP-only cookie.

    Production is served cross-site over HTTPS, so the cookie must be
    ``secure`` with ``samesite=none``; local development uses ``lax``.
    """
    is_production = settings.environment == "production"
    response.set_cookie(
        key="auth_token",
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        path="/",
        max_age=settings.auth.jwt_expiry_hours * 60 * 60,
    )


@router.post("/register", response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    response: Response,
    register_use_case: FromDishka[RegisterUseCase],
    settings: FromDishka[Settings],
) -> AuthResponse:
    """Create an account and sign it in.

    Args:
        request: Username, email and password
        response: FastAPI response object (for the auth cookie)
        register_use_case: Register use case from DI
        settings: Application settings from DI

    Returns:
        The new user and a bearer token

    Raises:
        HTTPException: 400 if the input is malformed or the username/email is taken
    """
    try:
        result = await register_use_case.execute(request)
    except ConflictError as e:
        logger.info(f"Registration rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        logger.info(f"Registration input invalid: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid input data"
        )

    _set_auth_cookie(response, result.token, settings)
    return result


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> AuthResponse:
    """Log in with username and password.

    Args:
        request: Username and password
        response: FastAPI response object (for the auth cookie)
        login_use_case: Login use case from DI
        settings: Application settings from DI

    Returns:
        The user and a bearer token

    Raises:
        HTTPException: 401 if the credentials don't match
    """
    try:
        result = await login_use_case.execute(request)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    logger.info(f"Login successful for user: {result.user.username}")
    _set_auth_cookie(response, result.token, settings)
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """Logout user by clearing authentication cookie.

    Bearer-token clients simply discard their token.
    """
    response.delete_cookie(key="auth_token", path="/")
    return MessageResponse(message="Successfully logged out")


@router.get("/me", response_model=UserInfo)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str | None = Depends(get_auth_token),
) -> UserInfo:
    """Get the authenticated user.

    Args:
        get_current_user_use_case: Get current user use case from DI
        token: JWT from the Authorization header or cookie

    Returns:
        Current user information

    Raises:
        HTTPException: 401 without a valid token, 404 if the account is gone
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token)
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except NotFoundError:
        # JWT valid but user not found in database (orphaned token)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
