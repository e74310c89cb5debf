"""List posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.items import PostItem
from forum.domain.service import PostService, VoteService
from forum.domain.value import UserId, VotableType


class ListPostsRequest(BaseModel):
    """List posts request."""

    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsUseCase:
    """Use case for listing posts newest first."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: ListPostsRequest) -> list[PostItem]:
        """Execute list posts flow.

        ``user_vote`` is resolved for the requesting viewer on every call,
        so two viewers see the same totals but their own votes.

        Args:
            request: List posts request with pagination

        Returns:
            Posts newest first, each with the viewer's vote
        """
        with logfire.span(
            "list_posts.execute",
            limit=request.limit,
            offset=request.offset,
            authenticated=request.user_id is not None,
        ):
            posts = await self.post_service.list_posts(
                limit=request.limit, offset=request.offset
            )

            viewer_id = UserId(UUID(request.user_id)) if request.user_id else None
            annotated = await self.vote_service.list_with_viewer_votes(
                VotableType.POST, posts, viewer_id
            )

            items = [
                PostItem.from_post(entry.target, user_vote=entry.user_vote)
                for entry in annotated
            ]
            logfire.info("Posts listed", count=len(items))
            return items
