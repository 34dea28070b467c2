"""Unit tests for the webhook notification dispatcher."""

import json
from uuid import uuid4

import httpx
import pytest

from banter.adapter.error import NotificationDeliveryError
from banter.adapter.notification import WebhookNotificationDispatcher
from banter.domain.model.notification import CommentEvent
from banter.domain.value import CommentId, NotificationType, PostId, UserId

WEBHOOK_URL = "https://push.example.com/events"


def _event() -> CommentEvent:
    return CommentEvent(
        type=NotificationType.MENTION,
        target_user_id=UserId(uuid4()),
        actor_id=UserId(uuid4()),
        comment_id=CommentId(uuid4()),
        post_id=PostId(uuid4()),
    )


@pytest.fixture
def webhook(monkeypatch):
    """Route the dispatcher's HTTP client through a mock transport.

    Returns a dict holding the captured requests and the status code to
    answer with.
    """
    state = {"status": 202, "requests": []}
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return httpx.Response(state["status"], json={"ok": state["status"] < 400})

    monkeypatch.setattr(
        httpx,
        "AsyncClient",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )
    return state


class TestWebhookNotificationDispatcher:
    """Tests for WebhookNotificationDispatcher."""

    @pytest.mark.asyncio
    async def test_without_url_only_logs(self, webhook):
        dispatcher = WebhookNotificationDispatcher(webhook_url=None)

        await dispatcher.dispatch(_event())

        assert webhook["requests"] == []

    @pytest.mark.asyncio
    async def test_posts_event_as_json(self, webhook):
        # Arrange
        dispatcher = WebhookNotificationDispatcher(webhook_url=WEBHOOK_URL)
        event = _event()

        # Act
        await dispatcher.dispatch(event)

        # Assert
        assert len(webhook["requests"]) == 1
        request = webhook["requests"][0]
        assert request.method == "POST"
        assert str(request.url) == WEBHOOK_URL
        body = json.loads(request.content)
        assert body["type"] == "mention"
        assert body["target_user_id"] == str(event.target_user_id)
        assert body["comment_id"] == str(event.comment_id)

    @pytest.mark.asyncio
    async def test_rejected_event_raises(self, webhook):
        webhook["status"] = 503
        dispatcher = WebhookNotificationDispatcher(webhook_url=WEBHOOK_URL)

        with pytest.raises(NotificationDeliveryError):
            await dispatcher.dispatch(_event())

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, monkeypatch):
        real_client = httpx.AsyncClient

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda **kwargs: real_client(
                transport=httpx.MockTransport(handler), **kwargs
            ),
        )
        dispatcher = WebhookNotificationDispatcher(webhook_url=WEBHOOK_URL)

        with pytest.raises(NotificationDeliveryError):
            await dispatcher.dispatch(_event())
