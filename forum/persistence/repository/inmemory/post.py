"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID. Locking is a no-op in memory."""
        return self._posts.get(post_id)

    async def find_all(self, limit: int = 30, offset: int = 0) -> list[Post]:
        """Find posts newest first."""
        posts = sorted(self._posts.values(), key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def save(self, post: Post) -> Post:
        """Save a post."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def update_content(
        self, post_id: PostId, title: str, content: str
    ) -> Optional[Post]:
        """Update title and content, bumping updated_at."""
        post = self._posts.get(post_id)
        if not post:
            return None
        updated = post.model_copy(
            update={"title": title, "content": content, "updated_at": datetime.now()}
        )
        self._posts[post_id] = updated
        return updated

    async def set_votes(self, post_id: PostId, votes: int) -> Optional[Post]:
        """Overwrite the cached vote total."""
        post = self._posts.get(post_id)
        if not post:
            return None
        updated = post.model_copy(update={"votes": votes})
        self._posts[post_id] = updated
        return updated
