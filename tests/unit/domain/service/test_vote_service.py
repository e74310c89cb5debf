"""Unit tests for VoteService."""

from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from forum.domain.error import NotFoundError, VoteConflictError
from forum.domain.repository import CommentRepository, PostRepository, VoteRepository
from forum.domain.service import CommentService, PostService, VoteService
from forum.domain.value import CommentId, PostId, UserId, VotableType
from forum.persistence.repository.inmemory import InMemoryVoteRepository
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _saved_post(unit_env, **kwargs):
    post_repo = await unit_env.get(PostRepository)
    return await post_repo.save(make_post(**kwargs))


class TestApplyVoteOnPost:
    """Tests for apply_vote against posts."""

    @pytest.mark.asyncio
    async def test_upvote_creates_ledger_row_and_counts_it(self, unit_env):
        """Upvoting a post should store one row and a total of 1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())

        # Act
        outcome = await vote_service.apply_vote(
            VotableType.POST, post.id, user_id, 1
        )

        # Assert
        assert outcome.votes == 1
        assert outcome.user_vote == 1
        assert outcome.target.votes == 1
        saved_vote = await vote_repo.find_by_user_and_votable(
            user_id, VotableType.POST, post.id
        )
        assert saved_vote is not None
        assert int(saved_vote.vote_type) == 1

    @pytest.mark.asyncio
    async def test_same_intent_twice_is_idempotent(self, unit_env):
        """Sending the same vote twice should leave one row and the same total."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())

        # Act
        await vote_service.apply_vote(VotableType.POST, post.id, user_id, 1)
        outcome = await vote_service.apply_vote(VotableType.POST, post.id, user_id, 1)

        # Assert
        assert outcome.votes == 1
        assert outcome.user_vote == 1
        assert len(await vote_repo.find_by_votable(VotableType.POST, post.id)) == 1

    @pytest.mark.asyncio
    async def test_switching_direction_moves_total_by_two(self, unit_env):
        """Going from up to down should flip the total from 1 to -1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.apply_vote(VotableType.POST, post.id, user_id, 1)

        # Act
        outcome = await vote_service.apply_vote(VotableType.POST, post.id, user_id, -1)

        # Assert
        assert outcome.votes == -1
        assert outcome.user_vote == -1

    @pytest.mark.asyncio
    async def test_zero_retracts_existing_vote(self, unit_env):
        """A zero intent should delete the row and restore the total."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.apply_vote(VotableType.POST, post.id, user_id, -1)

        # Act
        outcome = await vote_service.apply_vote(VotableType.POST, post.id, user_id, 0)

        # Assert
        assert outcome.votes == 0
        assert outcome.user_vote == 0
        assert (
            await vote_repo.find_by_user_and_votable(user_id, VotableType.POST, post.id)
            is None
        )

    @pytest.mark.asyncio
    async def test_zero_without_existing_vote_is_noop(self, unit_env):
        """Retracting a vote that doesn't exist should succeed with no change."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)

        # Act
        outcome = await vote_service.apply_vote(
            VotableType.POST, post.id, UserId(uuid4()), 0
        )

        # Assert
        assert outcome.votes == 0
        assert outcome.user_vote == 0

    @pytest.mark.asyncio
    async def test_total_matches_ledger_across_many_voters(self, unit_env):
        """The cached total should always equal ups minus downs."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _saved_post(unit_env)
        voters = [UserId(uuid4()) for _ in range(5)]

        # Act
        for voter in voters[:3]:
            await vote_service.apply_vote(VotableType.POST, post.id, voter, 1)
        for voter in voters[3:]:
            await vote_service.apply_vote(VotableType.POST, post.id, voter, -1)
        await vote_service.apply_vote(VotableType.POST, post.id, voters[0], 0)

        # Assert
        saved_post = await post_repo.find_by_id(post.id)
        assert saved_post.votes == 0
        assert saved_post.votes == await vote_repo.tally(VotableType.POST, post.id)

    @pytest.mark.asyncio
    async def test_two_users_see_their_own_vote(self, unit_env):
        """One user's vote should not show up as the other user's vote."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)
        user_a = UserId(uuid4())
        user_b = UserId(uuid4())

        # Act
        await vote_service.apply_vote(VotableType.POST, post.id, user_a, 1)
        outcome = await vote_service.apply_vote(VotableType.POST, post.id, user_b, -1)

        # Assert
        assert outcome.votes == 0
        assert await vote_service.get_user_vote(user_a, VotableType.POST, post.id) == 1
        assert await vote_service.get_user_vote(user_b, VotableType.POST, post.id) == -1

    @pytest.mark.asyncio
    async def test_vote_does_not_move_updated_at(self, unit_env):
        """Voting should not make a post look edited."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        original_time = datetime(2024, 1, 1, 12, 0, 0)
        post = await _saved_post(unit_env, created_at=original_time)

        # Act
        outcome = await vote_service.apply_vote(
            VotableType.POST, post.id, UserId(uuid4()), 1
        )

        # Assert
        assert outcome.target.updated_at == original_time

    @pytest.mark.asyncio
    async def test_missing_post_raises_without_writing(self, unit_env):
        """Voting on a missing post should raise and leave the ledger empty."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_id = PostId(uuid4())
        user_id = UserId(uuid4())

        # Act & Assert
        with pytest.raises(NotFoundError, match="Post not found"):
            await vote_service.apply_vote(VotableType.POST, post_id, user_id, 1)
        assert await vote_repo.find_by_votable(VotableType.POST, post_id) == []

    @pytest.mark.asyncio
    async def test_invalid_intent_raises_value_error(self, unit_env):
        """Only -1, 0 and 1 are accepted."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)

        # Act & Assert
        with pytest.raises(ValueError, match="Invalid vote type"):
            await vote_service.apply_vote(
                VotableType.POST, post.id, UserId(uuid4()), 2
            )


class TestApplyVoteOnComment:
    """Tests for apply_vote against comments."""

    @pytest.mark.asyncio
    async def test_comment_votes_are_independent_of_post(self, unit_env):
        """Voting on a comment should not change its post's total."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await _saved_post(unit_env)
        comment = await comment_repo.save(make_comment(post))
        user_id = UserId(uuid4())

        # Act
        outcome = await vote_service.apply_vote(
            VotableType.COMMENT, comment.id, user_id, -1
        )

        # Assert
        assert outcome.votes == -1
        assert outcome.target.id == comment.id
        assert (await post_repo.find_by_id(post.id)).votes == 0
        assert (await comment_repo.find_by_id(comment.id)).votes == -1

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        """Voting on a missing comment should raise NotFoundError."""
        # Arrange
        vote_service = await unit_env.get(VoteService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Comment not found"):
            await vote_service.apply_vote(
                VotableType.COMMENT, CommentId(uuid4()), UserId(uuid4()), 1
            )


class _CollidingVoteRepository(InMemoryVoteRepository):
    """Vote repository whose next ``collisions`` inserts hit the unique key."""

    def __init__(self, collisions: int = 0) -> None:
        super().__init__()
        self.collisions = collisions
        self.attempts = 0

    async def save(self, vote):
        self.attempts += 1
        if self.collisions:
            self.collisions -= 1
            raise IntegrityError("Duplicate vote", None, Exception())
        return await super().save(vote)


class TestLedgerConflicts:
    """Tests for the retry around the ledger write."""

    def _service(self, post_service, comment_service, repo):
        return VoteService(repo, post_service, comment_service)

    @pytest.mark.asyncio
    async def test_single_collision_is_retried(self, unit_env):
        """One unique-constraint hit should be absorbed by the retry."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        post = await _saved_post(unit_env)
        repo = _CollidingVoteRepository(collisions=1)
        vote_service = self._service(post_service, comment_service, repo)

        # Act
        outcome = await vote_service.apply_vote(
            VotableType.POST, post.id, UserId(uuid4()), 1
        )

        # Assert
        assert repo.attempts == 2
        assert outcome.votes == 1

    @pytest.mark.asyncio
    async def test_repeated_collision_raises_conflict(self, unit_env):
        """A second collision should surface as VoteConflictError."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await _saved_post(unit_env)
        repo = _CollidingVoteRepository(collisions=2)
        vote_service = self._service(post_service, comment_service, repo)

        # Act & Assert
        with pytest.raises(VoteConflictError):
            await vote_service.apply_vote(
                VotableType.POST, post.id, UserId(uuid4()), 1
            )
        assert (await post_repo.find_by_id(post.id)).votes == 0

    @pytest.mark.asyncio
    async def test_failed_change_keeps_previous_vote(self, unit_env):
        """A vote that keeps colliding should leave the old row and total alone."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        repo = _CollidingVoteRepository()
        vote_service = self._service(post_service, comment_service, repo)
        await vote_service.apply_vote(VotableType.POST, post.id, user_id, 1)
        repo.collisions = 2

        # Act
        with pytest.raises(VoteConflictError):
            await vote_service.apply_vote(VotableType.POST, post.id, user_id, -1)

        # Assert
        kept = await repo.find_by_user_and_votable(user_id, VotableType.POST, post.id)
        assert kept is not None
        assert int(kept.vote_type) == 1
        assert await repo.tally(VotableType.POST, post.id) == 1
        assert (await post_repo.find_by_id(post.id)).votes == 1


class TestRecompute:
    """Tests for recompute method."""

    @pytest.mark.asyncio
    async def test_recompute_repairs_drifted_total(self, unit_env):
        """A stale cached total should be replaced by the ledger sum."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await _saved_post(unit_env)
        await vote_service.apply_vote(VotableType.POST, post.id, UserId(uuid4()), 1)
        await post_repo.set_votes(post.id, 42)

        # Act
        total = await vote_service.recompute(VotableType.POST, post.id)

        # Assert
        assert total == 1
        assert (await post_repo.find_by_id(post.id)).votes == 1

    @pytest.mark.asyncio
    async def test_recompute_missing_post_raises(self, unit_env):
        """Recomputing a missing post should raise NotFoundError."""
        # Arrange
        vote_service = await unit_env.get(VoteService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.recompute(VotableType.POST, PostId(uuid4()))


class TestListWithViewerVotes:
    """Tests for list_with_viewer_votes method."""

    @pytest.mark.asyncio
    async def test_viewer_sees_only_own_votes(self, unit_env):
        """Each item should carry the viewer's vote, 0 where they haven't voted."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        voted = await _saved_post(unit_env, title="Voted")
        untouched = await _saved_post(unit_env, title="Untouched")
        viewer = UserId(uuid4())
        other = UserId(uuid4())
        await vote_service.apply_vote(VotableType.POST, voted.id, viewer, -1)
        await vote_service.apply_vote(VotableType.POST, untouched.id, other, 1)

        # Act
        result = await vote_service.list_with_viewer_votes(
            VotableType.POST, [voted, untouched], viewer
        )

        # Assert
        assert [r.target.id for r in result] == [voted.id, untouched.id]
        assert [r.user_vote for r in result] == [-1, 0]

    @pytest.mark.asyncio
    async def test_anonymous_viewer_gets_zero(self, unit_env):
        """Without a viewer every user_vote should be 0."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)
        await vote_service.apply_vote(VotableType.POST, post.id, UserId(uuid4()), 1)

        # Act
        result = await vote_service.list_with_viewer_votes(
            VotableType.POST, [post], None
        )

        # Assert
        assert result[0].user_vote == 0


class TestClearVotes:
    """Tests for clear_votes method."""

    @pytest.mark.asyncio
    async def test_clear_votes_removes_only_given_items(self, unit_env):
        """Clearing one post's votes should leave other posts alone."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        doomed = await _saved_post(unit_env)
        kept = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.apply_vote(VotableType.POST, doomed.id, user_id, 1)
        await vote_service.apply_vote(VotableType.POST, kept.id, user_id, 1)

        # Act
        removed = await vote_service.clear_votes(VotableType.POST, [doomed.id])

        # Assert
        assert removed == 1
        assert await vote_repo.find_by_votable(VotableType.POST, doomed.id) == []
        assert len(await vote_repo.find_by_votable(VotableType.POST, kept.id)) == 1


class TestVoteScenarios:
    """Worked sequences over a single post."""

    @pytest.mark.asyncio
    async def test_upvote_downvote_retract_sequence(self, unit_env):
        """A up, B down, A retracts: 1, 0, -1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)
        user_a = UserId(uuid4())
        user_b = UserId(uuid4())

        # Act
        after_a = await vote_service.apply_vote(VotableType.POST, post.id, user_a, 1)
        after_b = await vote_service.apply_vote(VotableType.POST, post.id, user_b, -1)
        after_retract = await vote_service.apply_vote(
            VotableType.POST, post.id, user_a, 0
        )

        # Assert
        assert [after_a.votes, after_b.votes, after_retract.votes] == [1, 0, -1]

    @pytest.mark.asyncio
    async def test_five_upvotes_then_one_switch(self, unit_env):
        """Five upvotes give 5; one voter switching to down gives 3."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)
        voters = [UserId(uuid4()) for _ in range(5)]

        # Act
        for voter in voters:
            outcome = await vote_service.apply_vote(
                VotableType.POST, post.id, voter, 1
            )
        assert outcome.votes == 5
        switched = await vote_service.apply_vote(
            VotableType.POST, post.id, voters[2], -1
        )

        # Assert
        assert switched.votes == 3
