"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from banter.config import Settings
from banter.interface.api.routes import comments, health
from banter.util.di.container import create_container, setup_di
from banter.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the DI container (and the database engine) on shutdown."""
    yield
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use (production container if None)
    """
    settings = Settings()

    # Instrument httpx for the notification webhook
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Banter Comments API",
        description="Comments, replies, reactions and moderation for Banter posts",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
