"""Unit tests for NotificationService."""

from uuid import uuid4

import pytest

from banter.domain.model.notification import CommentEvent
from banter.domain.repository import UserRepository
from banter.domain.service import NotificationDispatcher, NotificationService
from banter.domain.value import NotificationType, PostId, UserId
from tests.conftest import make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class FailingDispatcher(NotificationDispatcher):
    """Dispatcher whose delivery always fails."""

    def __init__(self) -> None:
        self.attempts = 0

    async def dispatch(self, event: CommentEvent) -> None:
        self.attempts += 1
        raise RuntimeError("push service down")


class TestNotifyNewComment:
    """Tests for NotificationService.notify_new_comment."""

    @pytest.mark.asyncio
    async def test_mention_notifies_user(self, unit_env):
        """A mentioned user gets a mention event."""
        # Arrange
        service = await unit_env.get(NotificationService)
        dispatcher = await unit_env.get(NotificationDispatcher)
        user_repo = await unit_env.get(UserRepository)
        rahim = await user_repo.save(make_user("rahim"))
        comment = make_comment(
            PostId(uuid4()), UserId(uuid4()), "Hello @rahim", mentions=["rahim"]
        )

        # Act
        events = await service.notify_new_comment(comment)

        # Assert
        assert len(events) == 1
        assert events[0].type == NotificationType.MENTION
        assert events[0].target_user_id == rahim.id
        assert events[0].actor_id == comment.author_id
        assert events[0].comment_id == comment.id
        assert dispatcher.events == events

    @pytest.mark.asyncio
    async def test_unknown_mentions_are_skipped(self, unit_env):
        service = await unit_env.get(NotificationService)
        comment = make_comment(
            PostId(uuid4()), UserId(uuid4()), "hi @nobody", mentions=["nobody"]
        )

        events = await service.notify_new_comment(comment)

        assert events == []

    @pytest.mark.asyncio
    async def test_self_mention_is_skipped(self, unit_env):
        service = await unit_env.get(NotificationService)
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("karim"))
        comment = make_comment(
            PostId(uuid4()), author.id, "note to @karim", mentions=["karim"]
        )

        events = await service.notify_new_comment(comment)

        assert events == []

    @pytest.mark.asyncio
    async def test_reply_notifies_parent_author(self, unit_env):
        service = await unit_env.get(NotificationService)
        post_id = PostId(uuid4())
        parent = make_comment(post_id, UserId(uuid4()), "parent")
        reply = make_comment(post_id, UserId(uuid4()), "reply", parent_id=parent.id)

        events = await service.notify_new_comment(reply, replied_to=parent)

        assert [(e.type, e.target_user_id) for e in events] == [
            (NotificationType.REPLY, parent.author_id)
        ]

    @pytest.mark.asyncio
    async def test_reply_to_own_comment_is_silent(self, unit_env):
        service = await unit_env.get(NotificationService)
        post_id, author_id = PostId(uuid4()), UserId(uuid4())
        parent = make_comment(post_id, author_id, "parent")
        reply = make_comment(post_id, author_id, "reply", parent_id=parent.id)

        events = await service.notify_new_comment(reply, replied_to=parent)

        assert events == []

    @pytest.mark.asyncio
    async def test_parent_author_mentioned_gets_one_event(self, unit_env):
        """Mentioning the author being replied to does not notify twice."""
        service = await unit_env.get(NotificationService)
        user_repo = await unit_env.get(UserRepository)
        rahim = await user_repo.save(make_user("rahim"))
        post_id = PostId(uuid4())
        parent = make_comment(post_id, rahim.id, "parent")
        reply = make_comment(
            post_id,
            UserId(uuid4()),
            "@rahim agreed",
            mentions=["rahim"],
            parent_id=parent.id,
        )

        events = await service.notify_new_comment(reply, replied_to=parent)

        assert [e.type for e in events] == [NotificationType.REPLY]

    @pytest.mark.asyncio
    async def test_delivery_failure_is_swallowed(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("rahim"))
        await user_repo.save(make_user("karim"))
        dispatcher = FailingDispatcher()
        service = NotificationService(user_repository=user_repo, dispatcher=dispatcher)
        comment = make_comment(
            PostId(uuid4()),
            UserId(uuid4()),
            "@rahim @karim",
            mentions=["rahim", "karim"],
        )

        events = await service.notify_new_comment(comment)

        assert len(events) == 2
        assert dispatcher.attempts == 2
