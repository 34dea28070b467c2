"""Comment entity.

Comments belong to a post and can be replied to one level deep. A reply
points at its parent through ``parent_id`` and the parent keeps the reply
in ``reply_ids``; both sides are written in the same unit of work.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from banter.domain.model.common import DomainModel
from banter.domain.value import (
    CommentId,
    CommentStatus,
    MediaKind,
    PostId,
    ReportReason,
    UserId,
)
from banter.domain.value.common import ValueObject

MAX_TEXT_LENGTH = 500

# ASCII word characters plus the Bengali block
MENTION_PATTERN = re.compile(r"@([\w\u0980-\u09FF]+)", re.ASCII)


def extract_mentions(text: str) -> list[str]:
    """Extract mentioned usernames from comment text.

    Args:
        text: Comment text

    Returns:
        Usernames without the leading '@', de-duplicated, in order of
        first occurrence
    """
    if not text:
        return []
    return list(dict.fromkeys(MENTION_PATTERN.findall(text)))


class CommentMedia(ValueObject):
    """Image or gif attached to a comment."""

    kind: MediaKind
    url: str = Field(min_length=1)
    storage_id: str = Field(min_length=1)  # Id in the media storage provider


class Like(ValueObject):
    """A user's like on a comment."""

    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)


class Reaction(ValueObject):
    """A user's emoji reaction on a comment."""

    emoji: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)


class Report(ValueObject):
    """A user's moderation report on a comment."""

    user_id: UserId
    reason: ReportReason
    description: str = ""
    reported_at: datetime = Field(default_factory=datetime.now)


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment on a post (``parent_id`` is None) or a
    reply to one.

    Business rules:
    - At most one like, one reaction and one report per user
    - ``report_count`` always equals the number of reports
    - Reaching the report threshold hides an active comment (one way)
    - Deleted is terminal
    - ``version`` is bumped by the repository on every write and used for
      optimistic concurrency control
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    text: str = Field(default="", max_length=MAX_TEXT_LENGTH)
    media: list[CommentMedia] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)
    parent_id: Optional[CommentId] = None
    reply_ids: list[CommentId] = Field(default_factory=list)
    likes: list[Like] = Field(default_factory=list)
    reactions: dict[UserId, Reaction] = Field(default_factory=dict)
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    original_text: Optional[str] = None
    is_pinned: bool = False
    status: CommentStatus = CommentStatus.ACTIVE
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    reports: list[Report] = Field(default_factory=list)
    report_count: int = Field(default=0, ge=0)
    version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_report_count(self) -> "Comment":
        """Validate the cached report count matches the reports."""
        if self.report_count != len(self.reports):
            raise ValueError(
                f"report_count {self.report_count} does not match "
                f"{len(self.reports)} reports"
            )
        return self

    @property
    def likes_count(self) -> int:
        return len(self.likes)

    @property
    def replies_count(self) -> int:
        return len(self.reply_ids)

    @property
    def reactions_count(self) -> int:
        return len(self.reactions)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @property
    def is_active(self) -> bool:
        return self.status == CommentStatus.ACTIVE

    def is_liked_by(self, user_id: UserId) -> bool:
        """Check whether a user has liked this comment."""
        return any(like.user_id == user_id for like in self.likes)

    def reaction_of(self, user_id: UserId) -> Optional[Reaction]:
        """Get a user's reaction, if any."""
        return self.reactions.get(user_id)

    def has_reported(self, user_id: UserId) -> bool:
        """Check whether a user has already reported this comment."""
        return any(report.user_id == user_id for report in self.reports)

    def toggle_like(self, user_id: UserId) -> tuple["Comment", bool]:
        """Like the comment, or unlike it if the user already liked it.

        Returns:
            Tuple of (updated comment, whether the user now likes it)
        """
        now = datetime.now()
        if self.is_liked_by(user_id):
            likes = [like for like in self.likes if like.user_id != user_id]
            return self.model_copy(update={"likes": likes, "updated_at": now}), False

        likes = [*self.likes, Like(user_id=user_id, created_at=now)]
        return self.model_copy(update={"likes": likes, "updated_at": now}), True

    def with_reaction(self, user_id: UserId, emoji: str) -> "Comment":
        """Set a user's reaction, replacing any previous one."""
        now = datetime.now()
        reactions = {**self.reactions, user_id: Reaction(emoji=emoji, created_at=now)}
        return self.model_copy(update={"reactions": reactions, "updated_at": now})

    def without_reaction(self, user_id: UserId) -> "Comment":
        """Remove a user's reaction. Returns self unchanged if there is none."""
        if user_id not in self.reactions:
            return self
        reactions = {uid: r for uid, r in self.reactions.items() if uid != user_id}
        return self.model_copy(
            update={"reactions": reactions, "updated_at": datetime.now()}
        )

    def edit(self, new_text: str) -> "Comment":
        """Replace the text, keeping the previous text as ``original_text``.

        Mentions are left as they were extracted at creation.
        """
        now = datetime.now()
        return self.model_copy(
            update={
                "original_text": self.text,
                "text": new_text,
                "is_edited": True,
                "edited_at": now,
                "updated_at": now,
            }
        )

    def soft_delete(self) -> "Comment":
        """Mark the comment deleted without removing it."""
        now = datetime.now()
        return self.model_copy(
            update={
                "status": CommentStatus.DELETED,
                "is_deleted": True,
                "deleted_at": now,
                "updated_at": now,
            }
        )

    def add_report(
        self,
        user_id: UserId,
        reason: ReportReason,
        description: str,
        hide_threshold: int,
    ) -> tuple["Comment", bool]:
        """Record a report, hiding the comment once the threshold is reached.

        Returns:
            Tuple of (updated comment, whether a new report was added).
            A repeat report by the same user returns self unchanged.
        """
        if self.has_reported(user_id):
            return self, False

        now = datetime.now()
        reports = [
            *self.reports,
            Report(
                user_id=user_id,
                reason=reason,
                description=description,
                reported_at=now,
            ),
        ]
        status = self.status
        if len(reports) >= hide_threshold and status == CommentStatus.ACTIVE:
            status = CommentStatus.HIDDEN

        return (
            self.model_copy(
                update={
                    "reports": reports,
                    "report_count": len(reports),
                    "status": status,
                    "updated_at": now,
                }
            ),
            True,
        )

    def add_reply(self, reply_id: CommentId) -> "Comment":
        """Append a reply to ``reply_ids``."""
        if reply_id in self.reply_ids:
            return self
        return self.model_copy(
            update={
                "reply_ids": [*self.reply_ids, reply_id],
                "updated_at": datetime.now(),
            }
        )

    def remove_reply(self, reply_id: CommentId) -> "Comment":
        """Drop a reply from ``reply_ids``. Returns self if it is not there."""
        if reply_id not in self.reply_ids:
            return self
        return self.model_copy(
            update={
                "reply_ids": [rid for rid in self.reply_ids if rid != reply_id],
                "updated_at": datetime.now(),
            }
        )

    def pin(self, pinned: bool) -> "Comment":
        """Pin or unpin the comment. Returns self if nothing changes."""
        if self.is_pinned == pinned:
            return self
        return self.model_copy(
            update={"is_pinned": pinned, "updated_at": datetime.now()}
        )
