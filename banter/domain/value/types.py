"""Domain value objects for Banter.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from banter.domain.value.common import RootValueObject


class CommentStatus(str, Enum):
    """Moderation status of a comment.

    active -> hidden happens automatically once enough reports arrive.
    deleted is terminal.
    """

    ACTIVE = "active"
    HIDDEN = "hidden"
    DELETED = "deleted"


class MediaKind(str, Enum):
    """Kind of media attached to a comment."""

    IMAGE = "image"
    GIF = "gif"


class ReportReason(str, Enum):
    """Reason given when reporting a comment."""

    SPAM = "spam"
    HARASSMENT = "harassment"
    INAPPROPRIATE = "inappropriate"
    OTHER = "other"


class NotificationType(str, Enum):
    """Kind of notification emitted for a new comment."""

    MENTION = "mention"
    REPLY = "reply"


class Username(RootValueObject[str]):
    """Public username of a user.

    3-20 characters: letters, digits and underscores.
    Examples: 'rahim', 'jane_doe', 'user42'
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[a-zA-Z0-9_]{3,20}$", v):
            raise ValueError(
                "Username must be 3-20 characters: letters, numbers and underscores"
            )
        return v
