"""Domain value objects for Banter."""

from banter.domain.value.identifiers import CommentId, PostId, UserId
from banter.domain.value.types import (
    CommentStatus,
    MediaKind,
    NotificationType,
    ReportReason,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Types
    "CommentStatus",
    "MediaKind",
    "NotificationType",
    "ReportReason",
    "Username",
]
