"""Unit tests for PostService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from forum.domain.error import NotAuthorizedError, NotFoundError
from forum.domain.repository import PostRepository
from forum.domain.service import PostService
from forum.domain.value import PostId, UserId
from forum.domain.value.types import Username
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePost:
    """Tests for create_post method."""

    @pytest.mark.asyncio
    async def test_create_post_starts_with_zero_votes(self, unit_env):
        """New posts should have no votes and matching timestamps."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())

        # Act
        post = await post_service.create_post(
            title="Hello",
            content="First post",
            author_id=author_id,
            author_username=Username(root="alice"),
        )

        # Assert
        assert post.votes == 0
        assert post.author_id == author_id
        assert post.author_username.root == "alice"
        assert post.created_at == post.updated_at
        assert await post_repo.find_by_id(post.id) == post


class TestListPosts:
    """Tests for list_posts method."""

    @pytest.mark.asyncio
    async def test_list_posts_newest_first_with_pagination(self, unit_env):
        """Posts should come back newest first, honoring limit and offset."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        base = datetime(2024, 1, 1, 12, 0, 0)
        posts = [
            await post_repo.save(
                make_post(title=f"Post {i}", created_at=base + timedelta(minutes=i))
            )
            for i in range(3)
        ]

        # Act
        first_page = await post_service.list_posts(limit=2, offset=0)
        second_page = await post_service.list_posts(limit=2, offset=2)

        # Assert
        assert [p.id for p in first_page] == [posts[2].id, posts[1].id]
        assert [p.id for p in second_page] == [posts[0].id]


class TestGetOwnedPost:
    """Tests for get_owned_post method."""

    @pytest.mark.asyncio
    async def test_author_gets_post(self, unit_env):
        """The author should be allowed to modify their post."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author = make_user("alice")
        post = await post_repo.save(make_post(author=author))

        # Act
        result = await post_service.get_owned_post(post.id, author.id)

        # Assert
        assert result.id == post.id

    @pytest.mark.asyncio
    async def test_other_user_is_rejected(self, unit_env):
        """Someone other than the author should get NotAuthorizedError."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await post_service.get_owned_post(post.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        """A missing post should raise NotFoundError before any ownership check."""
        # Arrange
        post_service = await unit_env.get(PostService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Post not found"):
            await post_service.get_owned_post(PostId(uuid4()), UserId(uuid4()))


class TestUpdateContent:
    """Tests for update_content method."""

    @pytest.mark.asyncio
    async def test_update_content_bumps_updated_at_and_keeps_votes(self, unit_env):
        """Editing should move updated_at and leave the vote total alone."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        original_time = datetime(2024, 1, 1, 12, 0, 0)
        post = await post_repo.save(make_post(votes=3, created_at=original_time))

        # Act
        result = await post_service.update_content(post.id, "New title", "New body")

        # Assert
        assert result.title == "New title"
        assert result.content == "New body"
        assert result.votes == 3
        assert result.created_at == original_time
        assert result.updated_at > original_time

    @pytest.mark.asyncio
    async def test_update_missing_post_raises(self, unit_env):
        """Updating a missing post should raise NotFoundError."""
        # Arrange
        post_service = await unit_env.get(PostService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await post_service.update_content(PostId(uuid4()), "Title", "Body")


class TestSetVotes:
    """Tests for set_votes method."""

    @pytest.mark.asyncio
    async def test_set_votes_leaves_updated_at(self, unit_env):
        """Storing a recount should not touch updated_at."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        original_time = datetime(2024, 1, 1, 12, 0, 0)
        post = await post_repo.save(make_post(created_at=original_time))

        # Act
        result = await post_service.set_votes(post.id, -2)

        # Assert
        assert result.votes == -2
        assert result.updated_at == original_time

    @pytest.mark.asyncio
    async def test_set_votes_missing_post_returns_none(self, unit_env):
        """Storing a total for a missing post should return None."""
        # Arrange
        post_service = await unit_env.get(PostService)

        # Act
        result = await post_service.set_votes(PostId(uuid4()), 1)

        # Assert
        assert result is None


class TestDeletePost:
    """Tests for delete_post method."""

    @pytest.mark.asyncio
    async def test_delete_post_removes_it(self, unit_env):
        """Deleting should remove the post and report success."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await (await unit_env.get(PostRepository)).save(make_post())

        # Act
        deleted = await post_service.delete_post(post.id)

        # Assert
        assert deleted is True
        assert await post_service.get_post_by_id(post.id) is None
