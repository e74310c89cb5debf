"""In-memory vote repository for testing."""

from typing import Optional, Sequence, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import CommentId, PostId, UserId, VotableType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    def _matches(
        self, vote: Vote, votable_type: VotableType, votable_id: PostId | CommentId
    ) -> bool:
        return vote.votable_type == votable_type and vote.votable_id == UUID(
            str(votable_id)
        )

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        for vote in self._votes:
            if vote.user_id == user_id and self._matches(vote, votable_type, votable_id):
                return vote
        return None

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> list[Vote]:
        """Find all votes for a votable item."""
        return [v for v in self._votes if self._matches(v, votable_type, votable_id)]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the user already has a vote on the item
        """
        # Same key as the unique_vote constraint: (user_id, votable_id)
        for existing in self._votes:
            if (
                existing.user_id == vote.user_id
                and existing.votable_id == vote.votable_id
            ):
                raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote

    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> bool:
        """Delete a vote by user and votable item."""
        for i, vote in enumerate(self._votes):
            if vote.user_id == user_id and self._matches(vote, votable_type, votable_id):
                self._votes.pop(i)
                return True
        return False

    async def replace_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
        vote: Optional[Vote],
    ) -> None:
        """Delete and re-insert the user's vote, restoring the old row on failure."""
        snapshot = list(self._votes)
        try:
            await self.delete_by_user_and_votable(user_id, votable_type, votable_id)
            if vote is not None:
                await self.save(vote)
        except IntegrityError:
            self._votes = snapshot
            raise

    async def delete_by_votables(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, CommentId]],
    ) -> int:
        """Delete all votes on the given items."""
        votable_uuids = {UUID(str(vid)) for vid in votable_ids}
        kept = [
            v
            for v in self._votes
            if not (v.votable_type == votable_type and v.votable_id in votable_uuids)
        ]
        removed = len(self._votes) - len(kept)
        self._votes = kept
        return removed

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[Union[PostId, CommentId]],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        votable_uuids = {UUID(str(vid)) for vid in votable_ids}
        return [
            v
            for v in self._votes
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in votable_uuids
        ]

    async def tally(
        self,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
    ) -> int:
        """Sum the ledger for one item."""
        return sum(
            int(v.vote_type)
            for v in self._votes
            if self._matches(v, votable_type, votable_id)
        )
