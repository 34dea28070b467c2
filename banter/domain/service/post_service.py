"""Post domain service."""

from typing import Iterable

import logfire

from banter.domain.model.post import Post
from banter.domain.repository import PostRepository
from banter.domain.value import PostId

from .base import Service


class PostService(Service):
    """Domain service for post lookups."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def save_post(self, post: Post) -> Post:
        """Save a post."""
        with logfire.span("post_service.save_post", post_id=str(post.id)):
            saved = await self.post_repository.save(post)
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Removed posts count as missing.

        Args:
            post_id: Post ID

        Returns:
            Post if found and not removed, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post and not post.is_deleted:
                logfire.info("Post found", post_id=str(post_id))
                return post

            logfire.warn(
                "Post not found",
                post_id=str(post_id),
                removed=bool(post and post.is_deleted),
            )
            return None

    async def get_posts_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        """Get several posts by ID in one lookup, leaving out removed posts."""
        unique_ids = list(dict.fromkeys(post_ids))
        with logfire.span("post_service.get_posts_by_ids", count=len(unique_ids)):
            if not unique_ids:
                return {}
            posts = await self.post_repository.find_by_ids(unique_ids)
            return {pid: post for pid, post in posts.items() if not post.is_deleted}
