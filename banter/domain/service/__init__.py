"""Domain services."""

from .base import Service
from .comment_service import (
    CommentService,
    CommentThread,
    DeleteResult,
    LikeResult,
    ReportResult,
)
from .jwt_service import JWTService
from .notification_service import NotificationDispatcher, NotificationService
from .post_service import PostService
from .user_service import UserService

__all__ = [
    "CommentService",
    "CommentThread",
    "DeleteResult",
    "JWTService",
    "LikeResult",
    "NotificationDispatcher",
    "NotificationService",
    "PostService",
    "ReportResult",
    "Service",
    "UserService",
]
