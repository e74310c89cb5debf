"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID, optionally taking a row lock."""
        with logfire.span(
            "post_repository.find_by_id", post_id=str(post_id), for_update=for_update
        ):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            if for_update:
                stmt = stmt.with_for_update()

            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                return None

            return row_to_post(row._asdict())

    async def find_all(self, limit: int = 30, offset: int = 0) -> List[Post]:
        """Find posts newest first with pagination."""
        with logfire.span("post_repository.find_all", limit=limit, offset=offset):
            stmt = (
                select(posts_table)
                .order_by(desc(posts_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]

            logfire.info("Found posts", count=len(posts))
            return posts

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span(
            "post_repository.save", post_id=str(post.id), title=post.title
        ):
            existing = await self.find_by_id(post.id)

            post_dict = post_to_dict(post)

            if existing:
                logfire.info("Updating existing post", post_id=str(post.id))
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                logfire.info(
                    "Inserting new post",
                    post_id=str(post.id),
                    author=post.author_username.root,
                )
                stmt = posts_table.insert().values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete)."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def update_content(
        self, post_id: PostId, title: str, content: str
    ) -> Optional[Post]:
        """Update title and content, bumping updated_at."""
        with logfire.span(
            "post_repository.update_content",
            post_id=str(post_id),
            content_length=len(content),
        ):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(title=title, content=content, updated_at=func.now())
                .returning(posts_table)
            )

            result = await self.session.execute(stmt)
            row = result.fetchone()

            if row is None:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            await self.session.flush()
            return row_to_post(row._asdict())

    async def set_votes(self, post_id: PostId, votes: int) -> Optional[Post]:
        """Overwrite the cached vote total. updated_at is left alone."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(votes=votes)
            .returning(posts_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_post(row._asdict()) if row else None
