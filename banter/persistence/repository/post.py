"""PostgreSQL implementation of Post repository."""

from typing import Iterable, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from banter.domain.model import Post
from banter.domain.repository import PostRepository
from banter.domain.value import PostId
from banter.persistence.mappers import post_to_dict, row_to_post
from banter.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, including removed posts."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        """Find several posts by ID in one query."""
        ids = list(post_ids)
        if not ids:
            return {}

        stmt = select(posts_table).where(posts_table.c.id.in_(ids))
        result = await self.session.execute(stmt)
        posts = [row_to_post(row._asdict()) for row in result.fetchall()]
        return {post.id: post for post in posts}

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        existing = await self.find_by_id(post.id)
        post_dict = post_to_dict(post)

        if existing:
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = insert(posts_table).values(**post_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return post
