"""PostgreSQL implementation of User repository."""

from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from banter.domain.model import User
from banter.domain.repository import UserRepository
from banter.domain.value import UserId
from banter.persistence.mappers import row_to_user, user_to_dict
from banter.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find several users by ID in one query."""
        ids = list(user_ids)
        if not ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(ids))
        result = await self.session.execute(stmt)
        users = [row_to_user(dict(row)) for row in result.mappings().all()]
        return {user.id: user for user in users}

    async def find_by_usernames(self, usernames: Iterable[str]) -> list[User]:
        """Find users by username, ignoring case."""
        lowered = list({name.lower() for name in usernames})
        if not lowered:
            return []

        stmt = select(users_table).where(func.lower(users_table.c.username).in_(lowered))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        # Check if user exists
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user
