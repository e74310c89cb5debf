"""Vote routes."""

from typing import Literal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status

from forum.application.usecase.base import CamelModel
from forum.application.usecase.items import CommentItem, PostItem
from forum.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from forum.domain.error import NotFoundError
from forum.domain.service import JWTService
from forum.domain.value import VotableType
from forum.interface.api.security import get_auth_token, require_user_id

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(CamelModel):
    """API request body: ``{"voteType": -1 | 0 | 1}``."""

    vote_type: Literal[-1, 0, 1]


async def _cast_vote(
    votable_type: VotableType,
    votable_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    token: str | None,
) -> PostItem | CommentItem:
    """Shared vote handler for posts and comments.

    Authentication is checked before anything touches the ledger, and a
    missing target is reported before any write. ``VoteConflictError`` is
    left to the app-wide 500 handler so the request session rolls back.
    """
    user_id = require_user_id(jwt_service, token, "vote")

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                votable_type=votable_type,
                votable_id=str(votable_id),
                user_id=user_id,
                vote_type=request.vote_type,
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{votable_type.value.capitalize()} not found",
        )


@router.post("/posts/{post_id}/vote", response_model=PostItem)
async def vote_post(
    post_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> PostItem | CommentItem:
    """Vote on a post.

    Requires authentication. ``voteType`` is the state the caller wants:
    1 up, -1 down, 0 to retract.

    Args:
        post_id: Post UUID
        request: Vote intent
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        token: JWT from the Authorization header or cookie

    Returns:
        The post with its recounted ``votes`` and the caller's ``userVote``

    Raises:
        HTTPException: 401 if not authenticated, 404 if the post doesn't exist
    """
    return await _cast_vote(
        VotableType.POST, post_id, request, cast_vote_use_case, jwt_service, token
    )


@router.post("/comments/{comment_id}/vote", response_model=CommentItem)
async def vote_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(get_auth_token),
) -> PostItem | CommentItem:
    """Vote on a comment.

    Requires authentication. Same semantics as voting on a post.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the comment doesn't exist
    """
    return await _cast_vote(
        VotableType.COMMENT,
        comment_id,
        request,
        cast_vote_use_case,
        jwt_service,
        token,
    )
