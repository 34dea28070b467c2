"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from banter.domain.model.post import Post
from banter.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post entity."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        """Find several posts by ID, including removed posts.

        Args:
            post_ids: Post IDs to look up

        Returns:
            Map of post ID to post; unknown IDs are left out
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass
