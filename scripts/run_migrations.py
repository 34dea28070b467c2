#!/usr/bin/env python3
"""Apply Alembic migrations with Logfire error tracking."""

import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from banter.config import Settings
from banter.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision`` and log any errors to Logfire."""
    settings = Settings()

    configure_logfire(settings)

    database = make_url(settings.database.url)
    with logfire.span(
        "run_migrations",
        revision=revision,
        database_host=database.host,
        database_name=database.database,
    ):
        try:
            # migrations/env.py reads the URL from settings
            command.upgrade(Config("alembic.ini"), revision)
            logfire.info("Database migrations completed", revision=revision)
            return 0

        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container doesn't start with a broken schema
            raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
