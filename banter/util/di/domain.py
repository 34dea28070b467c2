"""Domain layer DI providers."""

from dishka import Scope, provide

from banter.config import AuthSettings, CommentSettings
from banter.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from banter.domain.service import (
    CommentService,
    JWTService,
    NotificationDispatcher,
    NotificationService,
    PostService,
    UserService,
)
from banter.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository, settings=settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_notification_service(
        self, user_repository: UserRepository, dispatcher: NotificationDispatcher
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            user_repository=user_repository, dispatcher=dispatcher
        )
