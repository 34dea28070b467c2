"""User domain service."""

from typing import Iterable

import logfire

from banter.domain.model.user import User
from banter.domain.repository import UserRepository
from banter.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def save_user(self, user: User) -> User:
        """Save a user."""
        with logfire.span("user_service.save_user", user_id=str(user.id)):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id))
            return saved

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        """Get a user by ID."""
        with logfire.span("user_service.get_user_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
            return user

    async def get_users_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Get several users by ID in one lookup.

        Args:
            user_ids: User IDs (duplicates are fine)

        Returns:
            Map of user ID to user; unknown IDs are left out
        """
        unique_ids = list(dict.fromkeys(user_ids))
        with logfire.span("user_service.get_users_by_ids", count=len(unique_ids)):
            if not unique_ids:
                return {}
            users = await self.user_repository.find_by_ids(unique_ids)
            missing = len(unique_ids) - len(users)
            if missing:
                logfire.warn("Some users not found", missing=missing)
            return users

    async def get_users_by_usernames(self, usernames: Iterable[str]) -> dict[str, User]:
        """Get users by username, ignoring case.

        Args:
            usernames: Usernames, e.g. the mentions of a comment

        Returns:
            Map of lowercased username to user; unknown names are left out
        """
        wanted = list(dict.fromkeys(name.lower() for name in usernames))
        with logfire.span("user_service.get_users_by_usernames", count=len(wanted)):
            if not wanted:
                return {}
            users = await self.user_repository.find_by_usernames(wanted)
            return {user.username.root.lower(): user for user in users}
