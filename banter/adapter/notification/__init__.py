"""Notification adapter."""

from .dispatcher import MockNotificationDispatcher, WebhookNotificationDispatcher

__all__ = ["MockNotificationDispatcher", "WebhookNotificationDispatcher"]
