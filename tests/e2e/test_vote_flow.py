"""End-to-end tests for posts, comments and voting over HTTP."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from forum.domain.error import VoteConflictError
from forum.domain.repository import VoteRepository
from forum.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by in-memory repositories."""
    return TestClient(create_app(build_test_container()))


def _auth(client, username):
    """Register a user and return bearer headers for them.

    Cookies are cleared so requests are only authenticated by the headers.
    """
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "secret123",
        },
    )
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


def _create_post(client, headers, title="Hello"):
    response = client.post(
        "/api/posts", json={"title": title, "content": "Body"}, headers=headers
    )
    assert response.status_code == 201
    return response.json()


async def _always_collide(vote):
    raise IntegrityError("Duplicate vote", None, Exception())


class TestPostVoting:
    """Voting on posts through the API."""

    def test_vote_scenario_two_users(self, client):
        """Totals are shared, userVote is per caller."""
        # Arrange
        alice = _auth(client, "alice")
        bob = _auth(client, "bob")
        post = _create_post(client, alice)
        url = f"/api/posts/{post['id']}/vote"

        # Act & Assert
        r = client.post(url, json={"voteType": 1}, headers=alice)
        assert r.status_code == 200
        assert (r.json()["votes"], r.json()["userVote"]) == (1, 1)

        r = client.post(url, json={"voteType": -1}, headers=bob)
        assert (r.json()["votes"], r.json()["userVote"]) == (0, -1)

        r = client.post(url, json={"voteType": -1}, headers=alice)
        assert (r.json()["votes"], r.json()["userVote"]) == (-2, -1)

        r = client.post(url, json={"voteType": 0}, headers=bob)
        assert (r.json()["votes"], r.json()["userVote"]) == (-1, 0)

        listed_by_alice = client.get("/api/posts", headers=alice).json()
        listed_by_bob = client.get("/api/posts", headers=bob).json()
        listed_anonymously = client.get("/api/posts").json()
        assert listed_by_alice[0]["votes"] == -1
        assert listed_by_alice[0]["userVote"] == -1
        assert listed_by_bob[0]["userVote"] == 0
        assert listed_anonymously[0]["userVote"] == 0

    def test_repeated_vote_is_idempotent(self, client):
        """Sending the same vote twice doesn't double count."""
        # Arrange
        alice = _auth(client, "alice")
        post = _create_post(client, alice)
        url = f"/api/posts/{post['id']}/vote"

        # Act
        client.post(url, json={"voteType": 1}, headers=alice)
        r = client.post(url, json={"voteType": 1}, headers=alice)

        # Assert
        assert r.json()["votes"] == 1
        assert client.get(f"/api/posts/{post['id']}").json()["votes"] == 1

    def test_vote_does_not_change_updated_at(self, client):
        """Voting must not make the post look edited."""
        # Arrange
        alice = _auth(client, "alice")
        post = _create_post(client, alice)

        # Act
        r = client.post(
            f"/api/posts/{post['id']}/vote", json={"voteType": 1}, headers=alice
        )

        # Assert
        assert r.json()["updatedAt"] == post["updatedAt"]

    def test_vote_requires_auth(self, client):
        """Anonymous votes are rejected before anything is looked up."""
        # Act
        r = client.post(f"/api/posts/{uuid4()}/vote", json={"voteType": 1})

        # Assert
        assert r.status_code == 401
        assert r.json()["detail"] == "Authentication required to vote"

    def test_invalid_token_cannot_vote(self, client):
        """A bad token is treated as no token."""
        # Arrange
        alice = _auth(client, "alice")
        post = _create_post(client, alice)

        # Act
        r = client.post(
            f"/api/posts/{post['id']}/vote",
            json={"voteType": 1},
            headers={"Authorization": "Bearer garbage"},
        )

        # Assert
        assert r.status_code == 401

    def test_vote_on_missing_post_is_404(self, client):
        """Voting on an unknown post is a 404."""
        # Arrange
        alice = _auth(client, "alice")

        # Act
        r = client.post(
            f"/api/posts/{uuid4()}/vote", json={"voteType": 1}, headers=alice
        )

        # Assert
        assert r.status_code == 404
        assert r.json()["detail"] == "Post not found"

    def test_out_of_range_vote_is_422(self, client):
        """Only -1, 0 and 1 are accepted."""
        # Arrange
        alice = _auth(client, "alice")
        post = _create_post(client, alice)

        # Act
        r = client.post(
            f"/api/posts/{post['id']}/vote", json={"voteType": 2}, headers=alice
        )

        # Assert
        assert r.status_code == 422


class TestFailedVote:
    """A vote whose ledger write keeps colliding."""

    def test_failed_vote_keeps_previous_vote(self, monkeypatch):
        """The caller gets a 500 and the earlier vote and total survive."""
        # Arrange
        container = build_test_container()
        with TestClient(
            create_app(container), raise_server_exceptions=False
        ) as client:
            alice = _auth(client, "alice")
            post = _create_post(client, alice)
            url = f"/api/posts/{post['id']}/vote"
            first = client.post(url, json={"voteType": 1}, headers=alice)
            assert first.status_code == 200
            vote_repo = client.portal.call(container.get, VoteRepository)
            monkeypatch.setattr(vote_repo, "save", _always_collide)

            # Act
            response = client.post(url, json={"voteType": -1}, headers=alice)

            # Assert
            assert response.status_code == 500
            assert response.json() == {"detail": "Internal server error"}
            fetched = client.get(f"/api/posts/{post['id']}", headers=alice).json()
            assert (fetched["votes"], fetched["userVote"]) == (1, 1)

    def test_vote_conflict_leaves_the_request_scope(self, monkeypatch):
        """The error reaches the outermost middleware, past the DI session scope."""
        # Arrange
        container = build_test_container()
        with TestClient(create_app(container)) as client:
            alice = _auth(client, "alice")
            post = _create_post(client, alice)
            vote_repo = client.portal.call(container.get, VoteRepository)
            monkeypatch.setattr(vote_repo, "save", _always_collide)

            # Act & Assert
            with pytest.raises(VoteConflictError):
                client.post(
                    f"/api/posts/{post['id']}/vote",
                    json={"voteType": 1},
                    headers=alice,
                )


class TestCommentVoting:
    """Voting on comments through the API."""

    def test_comment_votes_are_separate_from_post(self, client):
        """A comment keeps its own total and the post's stays put."""
        # Arrange
        alice = _auth(client, "alice")
        bob = _auth(client, "bob")
        post = _create_post(client, alice)
        comment = client.post(
            f"/api/posts/{post['id']}/comments",
            json={"content": "First!"},
            headers=bob,
        ).json()

        # Act
        r = client.post(
            f"/api/comments/{comment['id']}/vote", json={"voteType": 1}, headers=alice
        )

        # Assert
        assert r.status_code == 200
        assert (r.json()["votes"], r.json()["userVote"]) == (1, 1)
        comments_for_alice = client.get(
            f"/api/posts/{post['id']}/comments", headers=alice
        ).json()
        comments_for_bob = client.get(
            f"/api/posts/{post['id']}/comments", headers=bob
        ).json()
        assert comments_for_alice[0]["userVote"] == 1
        assert comments_for_bob[0]["userVote"] == 0
        assert client.get(f"/api/posts/{post['id']}").json()["votes"] == 0

    def test_vote_on_missing_comment_is_404(self, client):
        """Voting on an unknown comment is a 404."""
        # Arrange
        alice = _auth(client, "alice")

        # Act
        r = client.post(
            f"/api/comments/{uuid4()}/vote", json={"voteType": -1}, headers=alice
        )

        # Assert
        assert r.status_code == 404
        assert r.json()["detail"] == "Comment not found"


class TestPostLifecycle:
    """Creating, editing and deleting content through the API."""

    def test_create_post_requires_auth(self, client):
        """Anonymous posting is rejected."""
        # Act
        r = client.post("/api/posts", json={"title": "Hi", "content": "There"})

        # Assert
        assert r.status_code == 401

    def test_only_author_can_edit(self, client):
        """Another user gets 403, the author gets the edited post."""
        # Arrange
        alice = _auth(client, "alice")
        bob = _auth(client, "bob")
        post = _create_post(client, alice)
        url = f"/api/posts/{post['id']}"
        body = {"title": "Edited", "content": "Edited body"}

        # Act
        as_bob = client.put(url, json=body, headers=bob)
        as_alice = client.put(url, json=body, headers=alice)

        # Assert
        assert as_bob.status_code == 403
        assert as_alice.status_code == 200
        assert as_alice.json()["title"] == "Edited"

    def test_delete_post_removes_comments(self, client):
        """Deleting a post takes its comments with it."""
        # Arrange
        alice = _auth(client, "alice")
        post = _create_post(client, alice)
        client.post(
            f"/api/posts/{post['id']}/comments", json={"content": "Hi"}, headers=alice
        )

        # Act
        r = client.delete(f"/api/posts/{post['id']}", headers=alice)

        # Assert
        assert r.status_code == 200
        assert r.json()["message"] == "Post deleted successfully"
        assert client.get(f"/api/posts/{post['id']}").status_code == 404
        assert client.get(f"/api/posts/{post['id']}/comments").json() == []

    def test_comment_on_missing_post_is_404(self, client):
        """Commenting on an unknown post is a 404."""
        # Arrange
        alice = _auth(client, "alice")

        # Act
        r = client.post(
            f"/api/posts/{uuid4()}/comments", json={"content": "Hi"}, headers=alice
        )

        # Assert
        assert r.status_code == 404

    def test_malformed_post_id_is_422(self, client):
        """Non-UUID ids fail path validation."""
        # Act
        r = client.get("/api/posts/not-a-uuid")

        # Assert
        assert r.status_code == 422
