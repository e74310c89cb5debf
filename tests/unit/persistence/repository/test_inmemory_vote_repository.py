"""Unit tests for the in-memory vote ledger used by the test container."""

from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from forum.domain.model import Vote
from forum.domain.value import PostId, UserId, VotableType, VoteId, VoteType
from forum.persistence.repository.inmemory import InMemoryVoteRepository


def _vote(user_id, votable_id, direction=VoteType.UP, votable_type=VotableType.POST):
    return Vote(
        id=VoteId(uuid4()),
        user_id=user_id,
        votable_type=votable_type,
        votable_id=votable_id,
        vote_type=direction,
        created_at=datetime.now(),
    )


class TestInMemoryVoteRepository:
    """The in-memory ledger mirrors the database constraints."""

    @pytest.mark.asyncio
    async def test_second_row_for_same_user_and_item_is_rejected(self):
        """Only one row per (user, item) is allowed."""
        # Arrange
        repo = InMemoryVoteRepository()
        user_id = UserId(uuid4())
        post_id = PostId(uuid4())
        await repo.save(_vote(user_id, post_id))

        # Act & Assert
        with pytest.raises(IntegrityError):
            await repo.save(_vote(user_id, post_id, VoteType.DOWN))

    @pytest.mark.asyncio
    async def test_tally_is_ups_minus_downs(self):
        """The tally sums every direction on the item."""
        # Arrange
        repo = InMemoryVoteRepository()
        post_id = PostId(uuid4())
        for direction in (VoteType.UP, VoteType.UP, VoteType.DOWN):
            await repo.save(_vote(UserId(uuid4()), post_id, direction))
        await repo.save(_vote(UserId(uuid4()), PostId(uuid4())))

        # Act & Assert
        assert await repo.tally(VotableType.POST, post_id) == 1

    @pytest.mark.asyncio
    async def test_batch_lookup_returns_only_that_users_votes(self):
        """The batch query is scoped to one user and the given items."""
        # Arrange
        repo = InMemoryVoteRepository()
        viewer = UserId(uuid4())
        first, second = PostId(uuid4()), PostId(uuid4())
        await repo.save(_vote(viewer, first))
        await repo.save(_vote(UserId(uuid4()), second, VoteType.DOWN))

        # Act
        votes = await repo.find_by_user_and_votables(
            viewer, VotableType.POST, [first, second]
        )

        # Assert
        assert [v.votable_id for v in votes] == [first]

    @pytest.mark.asyncio
    async def test_replace_vote_swaps_the_users_row(self):
        """Replacing drops the old direction and keeps a single row."""
        # Arrange
        repo = InMemoryVoteRepository()
        user_id = UserId(uuid4())
        post_id = PostId(uuid4())
        await repo.save(_vote(user_id, post_id))

        # Act
        await repo.replace_vote(
            user_id, VotableType.POST, post_id, _vote(user_id, post_id, VoteType.DOWN)
        )

        # Assert
        assert await repo.tally(VotableType.POST, post_id) == -1
        assert len(await repo.find_by_votable(VotableType.POST, post_id)) == 1

    @pytest.mark.asyncio
    async def test_replace_vote_restores_old_row_when_insert_fails(self):
        """A failed insert puts back the row the replace had deleted."""
        # Arrange
        repo = _RejectingVoteRepository()
        user_id = UserId(uuid4())
        post_id = PostId(uuid4())
        await InMemoryVoteRepository.save(repo, _vote(user_id, post_id))

        # Act & Assert
        with pytest.raises(IntegrityError):
            await repo.replace_vote(
                user_id,
                VotableType.POST,
                post_id,
                _vote(user_id, post_id, VoteType.DOWN),
            )
        kept = await repo.find_by_user_and_votable(user_id, VotableType.POST, post_id)
        assert kept is not None
        assert kept.vote_type == VoteType.UP


class _RejectingVoteRepository(InMemoryVoteRepository):
    """Every insert fails as if another row had taken the key."""

    async def save(self, vote):
        raise IntegrityError("Duplicate vote", None, Exception())
