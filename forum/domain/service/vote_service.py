"""Vote domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence, Union
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from forum.domain.error import NotFoundError, VoteConflictError
from forum.domain.model.comment import Comment
from forum.domain.model.post import Post
from forum.domain.model.vote import Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import (
    NEUTRAL_VOTE,
    VOTE_INTENTS,
    CommentId,
    PostId,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)

from .base import Service
from .comment_service import CommentService
from .post_service import PostService

Votable = Union[Post, Comment]

# Attempts at the delete/insert pair before giving up on a contended (user, item)
MAX_LEDGER_ATTEMPTS = 2


@dataclass
class VoteOutcome:
    """Result of applying a vote intent.

    ``votes`` is the freshly recounted total and ``user_vote`` the voter's
    own state after the write (0 when retracted).
    """

    target: Votable
    votes: int
    user_vote: int


@dataclass
class ViewerVote:
    """A votable paired with one viewer's own vote on it."""

    target: Votable
    user_vote: int


class VoteService(Service):
    """Domain service for the vote ledger and the cached totals it drives.

    Every mutation goes through the ledger: a user's previous row is
    removed, a new one written for a nonzero intent, and the target's
    ``votes`` column is rebuilt from a full recount.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.comment_service = comment_service

    async def apply_vote(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        user_id: UserId,
        vote_type: int,
    ) -> VoteOutcome:
        """Apply a user's vote intent to a post or comment.

        The intent is absolute: 1 and -1 set the user's vote, 0 clears it.
        Sending the same intent twice leaves the ledger unchanged.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            user_id: Voting user
            vote_type: Requested vote (-1, 0 or 1)

        Returns:
            The recounted total and the user's resulting vote

        Raises:
            ValueError: If vote_type is not -1, 0 or 1
            NotFoundError: If the item doesn't exist
            VoteConflictError: If the ledger write keeps colliding
        """
        if vote_type not in VOTE_INTENTS:
            raise ValueError(f"Invalid vote type: {vote_type}")

        with logfire.span(
            "vote_service.apply_vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(user_id),
            vote_type=vote_type,
        ):
            # Row lock serializes concurrent votes on the same item
            await self._require_target(votable_type, votable_id, for_update=True)

            for attempt in range(1, MAX_LEDGER_ATTEMPTS + 1):
                try:
                    await self._write_ledger(votable_type, votable_id, user_id, vote_type)
                    break
                except IntegrityError:
                    logfire.warn(
                        "Vote ledger write conflict",
                        votable_type=votable_type.value,
                        votable_id=str(votable_id),
                        user_id=str(user_id),
                        attempt=attempt,
                    )
            else:
                logfire.error(
                    "Vote ledger write failed after retry",
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                    user_id=str(user_id),
                )
                raise VoteConflictError(
                    votable_type.value, str(votable_id), str(user_id)
                )

            target = await self._store_total(votable_type, votable_id)

            logfire.info(
                "Vote applied",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                user_id=str(user_id),
                votes=target.votes,
                user_vote=vote_type,
            )
            return VoteOutcome(target=target, votes=target.votes, user_vote=vote_type)

    async def recompute(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> int:
        """Rebuild an item's cached total from the ledger.

        Safe to call at any time; it replaces whatever total was stored.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            Number of upvotes minus number of downvotes

        Raises:
            NotFoundError: If the item doesn't exist
        """
        with logfire.span(
            "vote_service.recompute",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
        ):
            target = await self._store_total(votable_type, votable_id)
            return target.votes

    async def get_user_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> int:
        """Get a user's current vote on an item, 0 if none."""
        vote = await self.vote_repository.find_by_user_and_votable(
            user_id=user_id,
            votable_type=votable_type,
            votable_id=votable_id,
        )
        return int(vote.vote_type) if vote else NEUTRAL_VOTE

    async def list_with_viewer_votes(
        self,
        votable_type: VotableType,
        votables: Sequence[Votable],
        viewer_id: UserId | None,
    ) -> list[ViewerVote]:
        """Attach the viewer's own vote to each item.

        Args:
            votable_type: Type of the items (post or comment)
            votables: Items to annotate, order is preserved
            viewer_id: Viewing user, None for anonymous requests

        Returns:
            One entry per item; anonymous viewers get 0 everywhere
        """
        if not votables or viewer_id is None:
            return [ViewerVote(target=v, user_vote=NEUTRAL_VOTE) for v in votables]

        # Batch query to fetch all votes at once (avoid N+1)
        votes_list = await self.vote_repository.find_by_user_and_votables(
            user_id=viewer_id,
            votable_type=votable_type,
            votable_ids=[v.id for v in votables],
        )
        by_target = {UUID(str(vote.votable_id)): int(vote.vote_type) for vote in votes_list}

        return [
            ViewerVote(
                target=v, user_vote=by_target.get(UUID(str(v.id)), NEUTRAL_VOTE)
            )
            for v in votables
        ]

    async def clear_votes(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, CommentId]],
    ) -> int:
        """Drop the ledger rows of items that are being deleted.

        Returns:
            Number of deleted votes
        """
        if not votable_ids:
            return 0

        with logfire.span(
            "vote_service.clear_votes",
            votable_type=votable_type.value,
            count=len(votable_ids),
        ):
            return await self.vote_repository.delete_by_votables(
                votable_type, votable_ids
            )

    async def _write_ledger(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        user_id: UserId,
        vote_type: int,
    ) -> None:
        vote = None
        if vote_type != NEUTRAL_VOTE:
            vote = Vote(
                id=VoteId(uuid4()),
                user_id=user_id,
                votable_type=votable_type,
                votable_id=UUID(str(votable_id)),
                vote_type=VoteType(vote_type),
                created_at=datetime.now(),
            )

        # Delete and insert succeed or fail together
        await self.vote_repository.replace_vote(
            user_id=user_id,
            votable_type=votable_type,
            votable_id=votable_id,
            vote=vote,
        )

    async def _store_total(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
    ) -> Votable:
        total = await self.vote_repository.tally(votable_type, votable_id)

        if votable_type == VotableType.POST:
            target = await self.post_service.set_votes(PostId(votable_id), total)
        else:
            target = await self.comment_service.set_votes(CommentId(votable_id), total)

        if target is None:
            raise NotFoundError(votable_type.value.capitalize(), str(votable_id))
        return target

    async def _require_target(
        self,
        votable_type: VotableType,
        votable_id: Union[PostId, CommentId],
        for_update: bool = False,
    ) -> Votable:
        target: Votable | None
        if votable_type == VotableType.POST:
            target = await self.post_service.get_post_by_id(
                PostId(votable_id), for_update=for_update
            )
        else:
            target = await self.comment_service.get_comment_by_id(
                CommentId(votable_id), for_update=for_update
            )

        if target is None:
            logfire.warn(
                "Vote on non-existent target",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
            )
            raise NotFoundError(votable_type.value.capitalize(), str(votable_id))
        return target
