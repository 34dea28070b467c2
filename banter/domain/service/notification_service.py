"""Notification domain service.

Works out who should hear about a new comment. Delivery is handed to a
``NotificationDispatcher`` implemented in the adapter layer.
"""

from typing import Optional

import logfire

from banter.domain.model.comment import Comment
from banter.domain.model.notification import CommentEvent
from banter.domain.repository import UserRepository
from banter.domain.value import NotificationType, UserId

from .base import Service


class NotificationDispatcher:
    """Generic interface for delivering comment events."""

    async def dispatch(self, event: CommentEvent) -> None:
        """Deliver one event.

        Args:
            event: Event to deliver
        """
        raise NotImplementedError


class NotificationService(Service):
    """Domain service for comment notifications."""

    def __init__(
        self,
        user_repository: UserRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        """Initialize notification service.

        Args:
            user_repository: User repository, for resolving mentions
            dispatcher: Event dispatcher
        """
        self.user_repository = user_repository
        self.dispatcher = dispatcher

    async def notify_new_comment(
        self,
        comment: Comment,
        replied_to: Optional[Comment] = None,
    ) -> list[CommentEvent]:
        """Send reply and mention events for a newly created comment.

        The author of ``replied_to`` gets a reply event unless they wrote
        the comment. Each mentioned user gets a mention event, except the
        author and whoever already got the reply event.

        Delivery failures are logged and do not propagate.

        Args:
            comment: The created comment
            replied_to: The comment it answers, if it is a reply

        Returns:
            The events handed to the dispatcher
        """
        with logfire.span(
            "notification_service.notify_new_comment",
            comment_id=str(comment.id),
            mentions=len(comment.mentions),
        ):
            events: list[CommentEvent] = []
            notified: set[UserId] = {comment.author_id}

            if replied_to and replied_to.author_id not in notified:
                events.append(
                    self._event(NotificationType.REPLY, replied_to.author_id, comment)
                )
                notified.add(replied_to.author_id)

            if comment.mentions:
                users = await self.user_repository.find_by_usernames(comment.mentions)
                for user in users:
                    if user.id in notified:
                        continue
                    events.append(
                        self._event(NotificationType.MENTION, user.id, comment)
                    )
                    notified.add(user.id)

            for event in events:
                await self._dispatch(event)

            logfire.info(
                "Comment notifications sent",
                comment_id=str(comment.id),
                count=len(events),
            )
            return events

    async def _dispatch(self, event: CommentEvent) -> None:
        try:
            await self.dispatcher.dispatch(event)
        except Exception as e:
            # The comment is already stored; delivery is best effort
            logfire.error(
                "Failed to dispatch comment notification",
                type=event.type.value,
                target_user_id=str(event.target_user_id),
                comment_id=str(event.comment_id),
                error=str(e),
            )

    @staticmethod
    def _event(
        type: NotificationType, target_user_id: UserId, comment: Comment
    ) -> CommentEvent:
        return CommentEvent(
            type=type,
            target_user_id=target_user_id,
            actor_id=comment.author_id,
            comment_id=comment.id,
            post_id=comment.post_id,
        )
