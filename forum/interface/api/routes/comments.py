"""Comment routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.application.usecase.items import CommentItem, MessageResponse
from forum.domain.error import NotAuthorizedError, NotFoundError
from forum.domain.service import JWTService
from forum.interface.api.security import get_auth_token, require_user_id

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentAPIRequest(BaseModel):
    """API request for creating or editing a comment."""

    content: str = Field(min_length=1, max_length=10000)


@router.get("/posts/{post_id}/comments", response_model=list[CommentItem])
async def get_comments(
    post_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> list[CommentItem]:
    """List a post's comments newest first.

    Authentication is optional; when present each comment carries the
    caller's own ``userVote``.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI
        jwt_service: JWT service for token verification (injected)
        token: JWT from the Authorization header or cookie (optional)

    Returns:
        Comments with vote totals and the caller's votes
    """
    user_id = jwt_service.get_user_id_from_token(token)
    return await get_comments_use_case.execute(
        GetCommentsRequest(post_id=str(post_id), user_id=user_id)
    )


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> CommentItem:
    """Comment on a post.

    Requires authentication.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the post doesn't exist
    """
    user_id = require_user_id(jwt_service, token, "comment")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=str(post_id), content=request.content, author_id=user_id
            )
        )
    except NotFoundError as e:
        logfire.warn("Comment target missing", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/comments/{comment_id}", response_model=CommentItem)
async def update_comment(
    comment_id: UUID,
    request: CommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> CommentItem:
    """Edit a comment. Only the author may edit it.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the author,
            404 if the comment doesn't exist
    """
    user_id = require_user_id(jwt_service, token, "edit comments")

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment_id), user_id=user_id, content=request.content
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found"
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment edit attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this comment",
        )


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> MessageResponse:
    """Delete a comment and its votes. Only the author may delete it.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the author,
            404 if the comment doesn't exist
    """
    user_id = require_user_id(jwt_service, token, "delete comments")

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=str(comment_id), user_id=user_id)
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found"
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
