"""In-memory comment repository for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from banter.domain.error import ConflictError, NotFoundError
from banter.domain.model.comment import Comment
from banter.domain.repository.comment import CommentRepository
from banter.domain.value import CommentId, PostId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _active(self) -> list[Comment]:
        return [c for c in self._comments.values() if c.is_active]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_top_level_by_post(
        self,
        post_id: PostId,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find active top-level comments of a post, pinned first."""
        comments = [
            c for c in self._active() if c.post_id == post_id and c.parent_id is None
        ]
        comments.sort(key=lambda c: (c.is_pinned, c.created_at), reverse=True)
        return comments[offset : offset + limit]

    async def find_replies(
        self,
        parent_id: CommentId,
        limit: Optional[int] = None,
        offset: int = 0,
        include_inactive: bool = False,
    ) -> list[Comment]:
        """Find direct replies of a comment, oldest first."""
        source = self._comments.values() if include_inactive else self._active()
        replies = sorted(
            (c for c in source if c.parent_id == parent_id),
            key=lambda c: c.created_at,
        )
        if limit is None:
            return replies[offset:]
        return replies[offset : offset + limit]

    async def find_reply_previews(
        self,
        parent_ids: list[CommentId],
        limit_per_parent: int,
    ) -> dict[CommentId, list[Comment]]:
        """Find the oldest active replies of several comments."""
        return {
            pid: await self.find_replies(pid, limit=max(limit_per_parent, 0))
            for pid in parent_ids
        }

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find active comments by a specific author."""
        comments = [c for c in self._active() if c.author_id == author_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def search(
        self,
        query: str,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find active comments containing a string, case-insensitively."""
        needle = query.lower()
        comments = [c for c in self._active() if needle in c.text.lower()]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self._comments[comment.id] = comment
        return comment

    async def update(self, comment: Comment) -> Comment:
        """Write a comment back if its version is unchanged."""
        stored = self._comments.get(comment.id)
        if stored is None:
            raise NotFoundError("Comment", str(comment.id))
        if stored.version != comment.version:
            raise ConflictError("Comment", str(comment.id), comment.version)

        updated = comment.model_copy(update={"version": comment.version + 1})
        self._comments[comment.id] = updated
        return updated

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self._comments.pop(comment_id, None)

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Restore the stored comments if the block raises."""
        snapshot = dict(self._comments)
        try:
            yield
        except Exception:
            self._comments = snapshot
            raise
