"""Post routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.items import MessageResponse, PostItem
from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from forum.domain.error import NotAuthorizedError, NotFoundError
from forum.domain.service import JWTService
from forum.interface.api.security import get_auth_token, require_user_id

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class PostAPIRequest(BaseModel):
    """API request for creating or editing a post."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)


@router.get("", response_model=list[PostItem])
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    token: str | None = Depends(get_auth_token),
) -> list[PostItem]:
    """List posts newest first.

    Authentication is optional; when present each post carries the
    caller's own ``userVote``.

    Args:
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for token verification (injected)
        limit: Page size
        offset: Number of posts to skip
        token: JWT from the Authorization header or cookie (optional)

    Returns:
        Posts with vote totals and the caller's votes
    """
    user_id = jwt_service.get_user_id_from_token(token)
    return await list_posts_use_case.execute(
        ListPostsRequest(limit=limit, offset=offset, user_id=user_id)
    )


@router.get("/{post_id}", response_model=PostItem)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> PostItem:
    """Get a single post.

    Raises:
        HTTPException: 404 if the post doesn't exist
    """
    user_id = jwt_service.get_user_id_from_token(token)
    try:
        return await get_post_use_case.execute(
            GetPostRequest(post_id=str(post_id), user_id=user_id)
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Post not found"
        )


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: PostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> PostItem:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post title and content
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        token: JWT from the Authorization header or cookie

    Returns:
        Created post with zero votes

    Raises:
        HTTPException: 401 if not authenticated, 404 if the account is gone
    """
    user_id = require_user_id(jwt_service, token, "create posts")

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                title=request.title, content=request.content, author_id=user_id
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )
    except Exception as e:
        logfire.error("Unexpected error creating post", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.put("/{post_id}", response_model=PostItem)
async def update_post(
    post_id: UUID,
    request: PostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> PostItem:
    """Edit a post's title and content.

    Only the author may edit a post.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the author,
            404 if the post doesn't exist
    """
    user_id = require_user_id(jwt_service, token, "edit posts")

    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=str(post_id),
                user_id=user_id,
                title=request.title,
                content=request.content,
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Post not found"
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized post edit attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this post",
        )


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> MessageResponse:
    """Delete a post together with its comments and votes.

    Only the author may delete a post.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the author,
            404 if the post doesn't exist
    """
    user_id = require_user_id(jwt_service, token, "delete posts")

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=str(post_id), user_id=user_id)
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Post not found"
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized post delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this post",
        )
