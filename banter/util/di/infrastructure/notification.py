"""Notification infrastructure providers."""

from dishka import Scope, provide

from banter.adapter.notification import WebhookNotificationDispatcher
from banter.config import NotificationSettings
from banter.domain.service import NotificationDispatcher
from banter.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_dispatcher(
        self, settings: NotificationSettings
    ) -> NotificationDispatcher:
        """Provide the webhook dispatcher.

        Without ``notifications.webhook_url`` events are only logged.
        """
        return WebhookNotificationDispatcher(
            webhook_url=settings.webhook_url,
            timeout_seconds=settings.timeout_seconds,
        )
