"""Domain model entities for Banter."""

from banter.domain.model.comment import (
    Comment,
    CommentMedia,
    Like,
    Reaction,
    Report,
    extract_mentions,
)
from banter.domain.model.notification import CommentEvent
from banter.domain.model.post import Post
from banter.domain.model.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
    "CommentMedia",
    "CommentEvent",
    "Like",
    "Reaction",
    "Report",
    "extract_mentions",
]
