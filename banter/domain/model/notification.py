"""Comment notification events.

Events are handed to a dispatcher; delivery (push, socket) happens
downstream.
"""

from datetime import datetime

from pydantic import Field

from banter.domain.model.common import DomainModel
from banter.domain.value import CommentId, NotificationType, PostId, UserId


class CommentEvent(DomainModel):
    """Something happened on a comment that a user should hear about."""

    type: NotificationType
    target_user_id: UserId
    actor_id: UserId
    comment_id: CommentId
    post_id: PostId
    created_at: datetime = Field(default_factory=datetime.now)
