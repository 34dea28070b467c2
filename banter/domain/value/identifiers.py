"""Strongly typed identifiers for Banter domain entities.

NewType keeps user, post and comment ids from being mixed up while
staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
