"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from banter.domain.model.user import User
from banter.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity.

    The comment store reads users to resolve authors and mentions.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find several users by ID.

        Args:
            user_ids: User IDs to look up

        Returns:
            Map of user ID to user for the users that exist
        """
        pass

    @abstractmethod
    async def find_by_usernames(self, usernames: Iterable[str]) -> list[User]:
        """Find users by username, case-insensitively.

        Args:
            usernames: Usernames to look up

        Returns:
            The users that exist, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
