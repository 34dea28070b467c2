"""Comment domain service."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Optional, TypeVar
from uuid import uuid4

import logfire
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random,
)

from banter.config import CommentSettings
from banter.domain.error import (
    CascadeDeleteError,
    ConflictError,
    ContentDeletedException,
    ContentNotActiveError,
    NotFoundError,
    ValidationError,
)
from banter.domain.model.comment import (
    MAX_TEXT_LENGTH,
    Comment,
    CommentMedia,
    extract_mentions,
)
from banter.domain.repository import CommentRepository
from banter.domain.value import (
    CommentId,
    CommentStatus,
    PostId,
    ReportReason,
    UserId,
)

from .base import Service

T = TypeVar("T")

MAX_REPORT_DESCRIPTION_LENGTH = 1000


@dataclass
class LikeResult:
    """Outcome of toggling a like."""

    liked: bool
    likes_count: int


@dataclass
class ReportResult:
    """Outcome of reporting a comment."""

    added: bool  # False when the user had already reported the comment
    report_count: int
    status: CommentStatus


@dataclass
class DeleteResult:
    """Outcome of deleting a comment."""

    comment: Comment
    removed_reply_ids: list[CommentId] = field(default_factory=list)


@dataclass
class CommentThread:
    """Top-level comment with a preview of its first replies."""

    comment: Comment
    replies: list[Comment]


def _log_write_conflict(retry_state: RetryCallState) -> None:
    """Log a retried optimistic-lock conflict."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logfire.warn(
        "Comment write conflict, retrying",
        attempt=retry_state.attempt_number,
        error=str(error),
    )


class CommentService(Service):
    """Domain service for comment operations.

    Every mutation is a read-modify-write of a single comment. Writes are
    version-checked by the repository and retried on conflict.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            settings: Comment rules (report threshold, paging, retries)
        """
        self.comment_repository = comment_repository
        self.settings = settings

    async def create_comment(
        self,
        author_id: UserId,
        post_id: PostId,
        text: str,
        media: Optional[Iterable[CommentMedia]] = None,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Replies stay one level deep: replying to a reply attaches the new
        comment to the top-level comment of that thread.

        Args:
            author_id: Author user ID
            post_id: Post ID
            text: Comment text
            media: Attached images or gifs
            parent_id: Comment being replied to (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If text is empty (without media) or too long
            NotFoundError: If the parent is missing or on another post
            ContentDeletedException: If the parent has been deleted
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            attachments = list(media or [])
            text = self._validate_text(text, allow_empty=bool(attachments))

            parent: Optional[Comment] = None
            if parent_id:
                parent = await self._find_parent(parent_id, post_id)

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                text=text,
                media=attachments,
                mentions=extract_mentions(text),
                parent_id=parent.id if parent else None,
                status=CommentStatus.ACTIVE,
                is_edited=False,
                created_at=now,
                updated_at=now,
            )
            # The reply and its parent's reply_ids are written together
            async with self.comment_repository.atomic():
                saved = await self.comment_repository.add(comment)
                if parent:
                    await self._mutate(
                        parent.id, lambda c: (c.add_reply(saved.id), None)
                    )

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                parent_id=str(saved.parent_id) if saved.parent_id else None,
                mentions=saved.mentions,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> LikeResult:
        """Like a comment, or remove the like if the user already liked it.

        Args:
            comment_id: Comment ID
            user_id: User toggling the like

        Returns:
            Whether the user now likes the comment and the new like count
        """
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            updated, liked = await self._mutate(
                comment_id, lambda c: c.toggle_like(user_id)
            )
            logfire.info(
                "Comment like toggled",
                comment_id=str(comment_id),
                liked=liked,
                likes_count=updated.likes_count,
            )
            return LikeResult(liked=liked, likes_count=updated.likes_count)

    async def set_reaction(
        self, comment_id: CommentId, user_id: UserId, emoji: str
    ) -> Comment:
        """Set a user's emoji reaction, replacing any previous one.

        Raises:
            ValidationError: If the emoji is empty or too long
        """
        with logfire.span(
            "comment_service.set_reaction",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            emoji = (emoji or "").strip()
            if not emoji or len(emoji) > self.settings.max_emoji_length:
                raise ValidationError(
                    f"Reaction must be 1-{self.settings.max_emoji_length} characters"
                )

            updated, _ = await self._mutate(
                comment_id, lambda c: (c.with_reaction(user_id, emoji), None)
            )
            logfire.info(
                "Comment reaction set",
                comment_id=str(comment_id),
                emoji=emoji,
                reactions_count=updated.reactions_count,
            )
            return updated

    async def clear_reaction(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Remove a user's reaction. Succeeds even if there is none."""
        with logfire.span(
            "comment_service.clear_reaction",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            updated, _ = await self._mutate(
                comment_id, lambda c: (c.without_reaction(user_id), None)
            )
            logfire.info(
                "Comment reaction cleared",
                comment_id=str(comment_id),
                reactions_count=updated.reactions_count,
            )
            return updated

    async def edit_comment(self, comment_id: CommentId, new_text: str) -> Comment:
        """Replace the text of an active comment.

        The previous text is kept in ``original_text``. Mentions are not
        recomputed.

        Args:
            comment_id: Comment ID
            new_text: New text content

        Returns:
            Updated comment

        Raises:
            ValidationError: If the new text is empty or too long
            ContentDeletedException: If the comment is deleted
            ContentNotActiveError: If the comment is hidden
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            text_length=len(new_text or ""),
        ):
            text = self._validate_text(new_text, allow_empty=False)

            def change(comment: Comment) -> tuple[Comment, None]:
                self._ensure_active(comment)
                return comment.edit(text), None

            updated, _ = await self._mutate(comment_id, change)
            logfire.info(
                "Comment edited",
                comment_id=str(comment_id),
                post_id=str(updated.post_id),
            )
            return updated

    async def delete_comment(self, comment_id: CommentId) -> DeleteResult:
        """Delete a comment.

        The comment itself is soft-deleted and leaves its parent's
        ``reply_ids``. Its direct replies are removed from the store.

        Args:
            comment_id: Comment ID

        Returns:
            The deleted comment and the IDs of the removed replies

        Raises:
            ContentDeletedException: If the comment is already deleted
            CascadeDeleteError: If some replies could not be removed
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):

            def soft_delete(comment: Comment) -> tuple[Comment, None]:
                if comment.is_deleted:
                    raise ContentDeletedException("Comment", str(comment.id))
                return comment.soft_delete(), None

            async with self.comment_repository.atomic():
                deleted, _ = await self._mutate(comment_id, soft_delete)
                if deleted.parent_id:
                    await self._detach_from_parent(deleted.id, deleted.parent_id)

            replies = await self.comment_repository.find_replies(
                comment_id, include_inactive=True
            )
            removed: list[CommentId] = []
            failures: dict[str, Exception] = {}
            for reply in replies:
                try:
                    async with self.comment_repository.atomic():
                        await self.comment_repository.delete(reply.id)
                    removed.append(reply.id)
                except Exception as e:
                    failures[str(reply.id)] = e

            if removed:

                def drop_replies(comment: Comment) -> tuple[Comment, None]:
                    for reply_id in removed:
                        comment = comment.remove_reply(reply_id)
                    return comment, None

                deleted, _ = await self._mutate(comment_id, drop_replies)

            if failures:
                logfire.error(
                    "Failed to remove replies of deleted comment",
                    comment_id=str(comment_id),
                    removed=len(removed),
                    failed=sorted(failures),
                )
                raise CascadeDeleteError(str(comment_id), failures)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                removed_replies=len(removed),
            )
            return DeleteResult(comment=deleted, removed_reply_ids=removed)

    async def add_report(
        self,
        comment_id: CommentId,
        user_id: UserId,
        reason: ReportReason | str,
        description: str = "",
    ) -> ReportResult:
        """Report a comment.

        A user can report a comment once; repeat reports are ignored. Once
        the report threshold is reached an active comment is hidden.

        Raises:
            ValidationError: If the reason is unknown or the description too long
        """
        with logfire.span(
            "comment_service.add_report",
            comment_id=str(comment_id),
            user_id=str(user_id),
            reason=str(reason),
        ):
            try:
                report_reason = ReportReason(reason)
            except ValueError:
                raise ValidationError(
                    f"Invalid report reason: {reason}. "
                    f"Expected one of: {', '.join(r.value for r in ReportReason)}"
                )
            description = (description or "").strip()
            if len(description) > MAX_REPORT_DESCRIPTION_LENGTH:
                raise ValidationError(
                    f"Report description cannot exceed "
                    f"{MAX_REPORT_DESCRIPTION_LENGTH} characters"
                )

            updated, added = await self._mutate(
                comment_id,
                lambda c: c.add_report(
                    user_id,
                    report_reason,
                    description,
                    self.settings.report_threshold,
                ),
            )

            if not added:
                logfire.info(
                    "Duplicate report ignored",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
            elif updated.status == CommentStatus.HIDDEN:
                logfire.warn(
                    "Comment hidden by reports",
                    comment_id=str(comment_id),
                    report_count=updated.report_count,
                )
            else:
                logfire.info(
                    "Comment reported",
                    comment_id=str(comment_id),
                    report_count=updated.report_count,
                )

            return ReportResult(
                added=added,
                report_count=updated.report_count,
                status=updated.status,
            )

    async def set_pinned(self, comment_id: CommentId, pinned: bool) -> Comment:
        """Pin or unpin a comment.

        Raises:
            ContentDeletedException: If the comment is deleted
        """
        with logfire.span(
            "comment_service.set_pinned", comment_id=str(comment_id), pinned=pinned
        ):

            def change(comment: Comment) -> tuple[Comment, None]:
                if comment.is_deleted:
                    raise ContentDeletedException("Comment", str(comment.id))
                return comment.pin(pinned), None

            updated, _ = await self._mutate(comment_id, change)
            logfire.info("Comment pin updated", comment_id=str(comment_id), pinned=pinned)
            return updated

    async def get_post_comments(
        self,
        post_id: PostId,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> list[CommentThread]:
        """Get a page of active top-level comments of a post.

        Pinned comments come first, then newest first. Each comment carries
        its oldest active replies as a preview.

        Args:
            post_id: Post ID
            page: 1-based page number
            page_size: Comments per page (defaults to the configured size)

        Returns:
            Comment threads for the page
        """
        if page_size is None:
            page_size = self.settings.post_page_size
        with logfire.span(
            "comment_service.get_post_comments",
            post_id=str(post_id),
            page=page,
            page_size=page_size,
        ):
            limit, offset = self._page_window(page, page_size)
            comments = await self.comment_repository.find_top_level_by_post(
                post_id, limit=limit, offset=offset
            )

            previews: dict[CommentId, list[Comment]] = {}
            if comments and self.settings.reply_preview_limit:
                previews = await self.comment_repository.find_reply_previews(
                    [c.id for c in comments],
                    limit_per_parent=self.settings.reply_preview_limit,
                )

            logfire.info(
                "Post comments retrieved",
                post_id=str(post_id),
                count=len(comments),
            )
            return [
                CommentThread(comment=c, replies=previews.get(c.id, []))
                for c in comments
            ]

    async def get_comment_replies(
        self,
        comment_id: CommentId,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> list[Comment]:
        """Get a page of active replies of a comment, oldest first.

        Raises:
            NotFoundError: If the comment does not exist
        """
        if page_size is None:
            page_size = self.settings.replies_page_size
        with logfire.span(
            "comment_service.get_comment_replies",
            comment_id=str(comment_id),
            page=page,
            page_size=page_size,
        ):
            limit, offset = self._page_window(page, page_size)
            await self._require(comment_id)
            replies = await self.comment_repository.find_replies(
                comment_id, limit=limit, offset=offset
            )
            logfire.info(
                "Comment replies retrieved",
                comment_id=str(comment_id),
                count=len(replies),
            )
            return replies

    async def search_comments(
        self,
        query: str,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> list[Comment]:
        """Search active comments by text, newest first.

        Raises:
            ValidationError: If the query is empty or paging is out of range
        """
        if limit is None:
            limit = self.settings.search_limit
        with logfire.span("comment_service.search_comments", limit=limit, skip=skip):
            query = (query or "").strip()
            if not query:
                raise ValidationError("Search query cannot be empty")
            if limit < 1 or limit > self.settings.max_page_size:
                raise ValidationError(
                    f"Limit must be between 1 and {self.settings.max_page_size}"
                )
            if skip < 0:
                raise ValidationError("Skip cannot be negative")

            comments = await self.comment_repository.search(
                query, limit=limit, offset=skip
            )
            logfire.info("Comments searched", count=len(comments))
            return comments

    async def get_user_comments(
        self,
        user_id: UserId,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> list[Comment]:
        """Get a page of a user's active comments, newest first."""
        if page_size is None:
            page_size = self.settings.post_page_size
        with logfire.span(
            "comment_service.get_user_comments",
            user_id=str(user_id),
            page=page,
            page_size=page_size,
        ):
            limit, offset = self._page_window(page, page_size)
            comments = await self.comment_repository.find_by_author(
                user_id, limit=limit, offset=offset
            )
            logfire.info(
                "User comments retrieved", user_id=str(user_id), count=len(comments)
            )
            return comments

    async def _mutate(
        self,
        comment_id: CommentId,
        change: Callable[[Comment], tuple[Comment, T]],
    ) -> tuple[Comment, T]:
        """Apply a change to a comment and write it back.

        The comment is re-read and the change re-applied when the write
        loses a race. ``change`` returning the same instance means nothing
        to write.

        Raises:
            NotFoundError: If the comment does not exist
            ConflictError: If every attempt lost a race
        """
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(ConflictError),
            stop=stop_after_attempt(self.settings.max_write_retries),
            wait=wait_random(min=0, max=0.05),
            before_sleep=_log_write_conflict,
            reraise=True,
        ):
            with attempt:
                comment = await self._require(comment_id)
                updated, result = change(comment)
                if updated is not comment:
                    updated = await self.comment_repository.update(updated)
                return updated, result
        raise ConflictError("Comment", str(comment_id), 0)  # pragma: no cover

    async def _require(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _find_parent(self, parent_id: CommentId, post_id: PostId) -> Comment:
        """Resolve the comment a reply attaches to."""
        parent = await self.comment_repository.find_by_id(parent_id)
        if not parent:
            logfire.error(
                "Parent comment not found",
                parent_id=str(parent_id),
                post_id=str(post_id),
            )
            raise NotFoundError("Parent comment", str(parent_id))
        if parent.post_id != post_id:
            logfire.error(
                "Parent comment does not belong to post",
                parent_id=str(parent_id),
                parent_post_id=str(parent.post_id),
                target_post_id=str(post_id),
            )
            raise NotFoundError("Parent comment", f"{parent_id} on post {post_id}")

        if parent.is_deleted:
            raise ContentDeletedException("Comment", str(parent.id))

        if parent.parent_id:
            # Flatten replies-to-replies onto the top-level comment
            return await self._find_parent(parent.parent_id, post_id)
        return parent

    async def _detach_from_parent(
        self, comment_id: CommentId, parent_id: CommentId
    ) -> None:
        """Remove a deleted reply from its parent's ``reply_ids``."""
        try:
            await self._mutate(parent_id, lambda p: (p.remove_reply(comment_id), None))
        except NotFoundError:
            logfire.warn(
                "Parent of deleted reply no longer exists",
                comment_id=str(comment_id),
                parent_id=str(parent_id),
            )

    def _ensure_active(self, comment: Comment) -> None:
        if comment.is_deleted:
            raise ContentDeletedException("Comment", str(comment.id))
        if not comment.is_active:
            raise ContentNotActiveError("Comment", str(comment.id), comment.status.value)

    def _validate_text(self, text: str | None, allow_empty: bool) -> str:
        """Trim and validate comment text.

        Raises:
            ValidationError: If text is empty (unless allowed) or too long
        """
        text = (text or "").strip()
        if not text and not allow_empty:
            raise ValidationError("Comment text is required")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(
                f"Comment cannot exceed {MAX_TEXT_LENGTH} characters"
            )
        return text

    def _page_window(self, page: int, page_size: int) -> tuple[int, int]:
        """Convert a 1-based page into (limit, offset).

        Raises:
            ValidationError: If page or page size is out of range
        """
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if page_size < 1 or page_size > self.settings.max_page_size:
            raise ValidationError(
                f"Page size must be between 1 and {self.settings.max_page_size}"
            )
        return page_size, (page - 1) * page_size
