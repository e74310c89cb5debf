"""Request authentication helpers.

Clients send ``Authorization: Bearer <jwt>``; browsers that were handed
the ``auth_token`` cookie may send that instead.
"""

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from forum.domain.service import JWTService

bearer = HTTPBearer(auto_error=False)


async def get_auth_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    auth_token: str | None = Cookie(default=None),
) -> str | None:
    """Get the raw JWT from the Authorization header or the auth cookie.

    Returns:
        The token, or None for anonymous requests
    """
    if credentials:
        return credentials.credentials
    return auth_token


def require_user_id(jwt_service: JWTService, token: str | None, action: str) -> str:
    """Resolve the caller's user ID or reject the request.

    Args:
        jwt_service: JWT service for token verification
        token: Raw token from :func:`get_auth_token`
        action: What the caller tried to do, used in the error detail

    Returns:
        Authenticated user ID

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    user_id = jwt_service.get_user_id_from_token(token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
