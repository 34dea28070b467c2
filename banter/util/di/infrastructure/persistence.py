"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from banter.config import Settings
from banter.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from banter.persistence.database import create_engine, create_session_factory
from banter.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresUserRepository,
)
from banter.util.di.base import ProviderBase
from banter.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised. A reply and its parent's
        ``reply_ids`` are therefore written together or not at all.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)
