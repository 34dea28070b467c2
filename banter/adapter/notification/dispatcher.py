"""Comment notification dispatchers.

Events go to the push/socket delivery service as JSON over HTTP.
"""

from typing import Optional

import httpx
import logfire

from banter.adapter.error import NotificationDeliveryError
from banter.domain.model.notification import CommentEvent
from banter.domain.service.notification_service import NotificationDispatcher


class WebhookNotificationDispatcher(NotificationDispatcher):
    """Dispatcher that POSTs each event to a webhook.

    Without a webhook URL events are only logged.
    """

    def __init__(self, webhook_url: Optional[str], timeout_seconds: float = 5.0) -> None:
        """Initialize webhook dispatcher.

        Args:
            webhook_url: Delivery endpoint (None to only log events)
            timeout_seconds: Request timeout
        """
        self.webhook_url = webhook_url
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, event: CommentEvent) -> None:
        """POST an event to the webhook.

        Raises:
            NotificationDeliveryError: If the request fails or is rejected
        """
        if not self.webhook_url:
            logfire.info(
                "Comment notification (no webhook configured)",
                type=event.type.value,
                target_user_id=str(event.target_user_id),
                comment_id=str(event.comment_id),
            )
            return

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.webhook_url,
                    json=event.model_dump(mode="json"),
                    timeout=self.timeout_seconds,
                )

                if response.status_code >= 400:
                    logfire.error(
                        "Notification webhook rejected event",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise NotificationDeliveryError(
                        f"Webhook returned {response.status_code}"
                    )

        except httpx.HTTPError as e:
            logfire.error("Notification webhook HTTP error", error=str(e))
            raise NotificationDeliveryError(f"HTTP error delivering notification: {e}")

        logfire.info(
            "Comment notification delivered",
            type=event.type.value,
            target_user_id=str(event.target_user_id),
        )


class MockNotificationDispatcher(NotificationDispatcher):
    """Mock dispatcher for testing.

    Records events instead of delivering them.
    """

    def __init__(self) -> None:
        self.events: list[CommentEvent] = []

    async def dispatch(self, event: CommentEvent) -> None:
        """Record the event."""
        self.events.append(event)
