"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, List, Optional

from banter.domain.model.comment import Comment
from banter.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Unless stated otherwise, finders only return active comments.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, whatever its status.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level_by_post(
        self,
        post_id: PostId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active top-level comments of a post.

        Pinned comments come first, then newest first.

        Args:
            post_id: The post ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of top-level comments
        """
        pass

    @abstractmethod
    async def find_replies(
        self,
        parent_id: CommentId,
        limit: Optional[int] = None,
        offset: int = 0,
        include_inactive: bool = False,
    ) -> List[Comment]:
        """Find direct replies of a comment, oldest first.

        Args:
            parent_id: The parent comment ID
            limit: Maximum number of replies to return (None for all)
            offset: Number of replies to skip
            include_inactive: Whether to include hidden and deleted replies

        Returns:
            List of replies
        """
        pass

    @abstractmethod
    async def find_reply_previews(
        self,
        parent_ids: List[CommentId],
        limit_per_parent: int,
    ) -> dict[CommentId, List[Comment]]:
        """Find the first active replies of several comments at once.

        Args:
            parent_ids: Parent comment IDs
            limit_per_parent: Maximum number of replies per parent

        Returns:
            Map of parent ID to its oldest replies; parents without
            replies map to an empty list
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active comments by a specific author, newest first.

        Args:
            author_id: The author's user ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments by the author
        """
        pass

    @abstractmethod
    async def search(
        self,
        query: str,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active comments whose text contains a string, newest first.

        Matching is a case-insensitive literal substring match.

        Args:
            query: Text to look for
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Matching comments
        """
        pass

    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def update(self, comment: Comment) -> Comment:
        """Write an existing comment back with an optimistic version check.

        The write only succeeds if the stored version still equals
        ``comment.version``; the stored version is then incremented.

        Args:
            comment: The modified comment, carrying the version it was read at

        Returns:
            The stored comment with its new version

        Raises:
            NotFoundError: If the comment no longer exists
            ConflictError: If the comment was modified since it was read
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Args:
            comment_id: The comment ID to delete
        """
        pass

    @abstractmethod
    def atomic(self) -> AsyncContextManager[None]:
        """Group several writes so they are kept or discarded together.

        Writes made inside the block are undone if the block raises; the
        exception is re-raised. Blocks may be nested.

        Usage:
            async with comment_repository.atomic():
                await comment_repository.add(reply)
                await comment_repository.update(parent)
        """
        pass
