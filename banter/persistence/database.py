"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from banter.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database configuration

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )
