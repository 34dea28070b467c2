"""PostgreSQL implementation of Comment repository."""

from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Set

import logfire
from sqlalchemy import and_, delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from banter.domain.error import ConflictError, NotFoundError
from banter.domain.model import Comment
from banter.domain.repository import CommentRepository
from banter.domain.value import CommentId, CommentStatus, PostId, UserId
from banter.persistence.mappers import comment_to_dict, row_to_comment
from banter.persistence.tables import comments_table


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the query matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _comment_to_db_dict(
        self, comment: Comment, exclude: Optional[Set[str]] = None
    ) -> Dict[str, Any]:
        """Convert comment to database dict with optional field exclusion."""
        comment_dict = comment_to_dict(comment)
        if exclude:
            return {k: v for k, v in comment_dict.items() if k not in exclude}
        return comment_dict

    async def _fetch(self, stmt) -> List[Comment]:
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_top_level_by_post(
        self,
        post_id: PostId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active top-level comments of a post, pinned first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
            .where(comments_table.c.status == CommentStatus.ACTIVE.value)
            .order_by(
                desc(comments_table.c.is_pinned), desc(comments_table.c.created_at)
            )
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch(stmt)

    async def find_replies(
        self,
        parent_id: CommentId,
        limit: Optional[int] = None,
        offset: int = 0,
        include_inactive: bool = False,
    ) -> List[Comment]:
        """Find direct replies of a comment, oldest first."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)

        if not include_inactive:
            stmt = stmt.where(comments_table.c.status == CommentStatus.ACTIVE.value)

        stmt = stmt.order_by(comments_table.c.created_at).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        return await self._fetch(stmt)

    async def find_reply_previews(
        self,
        parent_ids: List[CommentId],
        limit_per_parent: int,
    ) -> dict[CommentId, List[Comment]]:
        """Find the oldest active replies of several comments in one query."""
        previews: dict[CommentId, List[Comment]] = defaultdict(list)
        if not parent_ids or limit_per_parent < 1:
            return {pid: [] for pid in parent_ids}

        position = (
            func.row_number()
            .over(
                partition_by=comments_table.c.parent_id,
                order_by=comments_table.c.created_at,
            )
            .label("position")
        )
        ranked = (
            select(comments_table, position)
            .where(comments_table.c.parent_id.in_(parent_ids))
            .where(comments_table.c.status == CommentStatus.ACTIVE.value)
            .subquery()
        )
        stmt = (
            select(ranked)
            .where(ranked.c.position <= limit_per_parent)
            .order_by(ranked.c.parent_id, ranked.c.created_at)
        )

        for reply in await self._fetch(stmt):
            if reply.parent_id:
                previews[reply.parent_id].append(reply)

        return {pid: previews.get(pid, []) for pid in parent_ids}

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active comments by a specific author."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .where(comments_table.c.status == CommentStatus.ACTIVE.value)
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch(stmt)

    async def search(
        self,
        query: str,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active comments containing a string, case-insensitively."""
        pattern = f"%{_escape_like(query)}%"
        stmt = (
            select(comments_table)
            .where(comments_table.c.text.ilike(pattern, escape="\\"))
            .where(comments_table.c.status == CommentStatus.ACTIVE.value)
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch(stmt)

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = (
            insert(comments_table)
            .values(**self._comment_to_db_dict(comment))
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else comment

    async def update(self, comment: Comment) -> Comment:
        """Write a comment back if its version is unchanged."""
        values = self._comment_to_db_dict(
            comment, exclude={"id", "post_id", "author_id", "created_at", "version"}
        )
        stmt = (
            update(comments_table)
            .where(
                and_(
                    comments_table.c.id == comment.id,
                    comments_table.c.version == comment.version,
                )
            )
            .values(**values, version=comments_table.c.version + 1)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            exists = await self.session.execute(
                select(comments_table.c.id).where(comments_table.c.id == comment.id)
            )
            if exists.first() is None:
                raise NotFoundError("Comment", str(comment.id))
            logfire.warn(
                "Stale comment write rejected",
                comment_id=str(comment.id),
                expected_version=comment.version,
            )
            raise ConflictError("Comment", str(comment.id), comment.version)

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Run the block in a SAVEPOINT of the request transaction.

        A failed statement inside the block only rolls back to the savepoint,
        so the request transaction stays usable.
        """
        async with self.session.begin_nested():
            yield
