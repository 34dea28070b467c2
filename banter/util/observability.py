"""Observability configuration using Logfire.

Logfire provides structured logging and tracing on OpenTelemetry, with
integrations for FastAPI, SQLAlchemy and httpx.

Usage:
    import logfire

    # Structured logging
    logfire.info("Comment created", comment_id=str(comment.id))

    # Manual spans for critical operations
    with logfire.span("comment_service.delete_comment", comment_id=...):
        ...
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from banter.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    - Development: local console only unless a token is provided
    - Production: sends to Logfire cloud when a token is provided

    Set OBSERVABILITY__LOGFIRE_TOKEN to enable cloud sending, or control it
    explicitly with OBSERVABILITY__SEND_TO_LOGFIRE.

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs: dict[str, Any] = {
        "service_name": "banter-comments",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Traces every request with its duration, errors, method, path and client.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        """Map request attributes, handling both HTTP and WebSocket requests."""
        result = {**attributes}

        # WebSocket requests have no method
        if hasattr(request, "method"):
            result["method"] = request.method

        if hasattr(request, "url"):
            result["path"] = request.url.path

        if hasattr(request, "client") and request.client:
            result["client_host"] = request.client.host

        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Traces every query with its duration and the surrounding transaction.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument httpx with Logfire.

    Traces the notification webhook calls.
    """
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
