"""Mapping of domain errors to HTTP errors for the routes."""

import logfire
from fastapi import HTTPException, status

from banter.domain.error import (
    CascadeDeleteError,
    ConflictError,
    ContentDeletedException,
    ContentNotActiveError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)

# Checked in order; the first matching type wins
ERROR_STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ContentDeletedException, status.HTTP_409_CONFLICT),
    (ContentNotActiveError, status.HTTP_409_CONFLICT),
    (ConflictError, status.HTTP_409_CONFLICT),
    (CascadeDeleteError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_code_for(error: DomainError) -> int:
    """Pick the HTTP status for a domain error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def http_error(error: DomainError, action: str) -> HTTPException:
    """Log a failed request and build the HTTPException a route raises.

    Args:
        error: Domain error raised by a use case
        action: What the request tried to do, e.g. "create comment"

    Returns:
        HTTPException carrying the error message as ``detail``
    """
    status_code = status_code_for(error)
    if status_code >= 500:
        logfire.error(
            f"Failed to {action}",
            error_type=type(error).__name__,
            error=str(error),
        )
    else:
        logfire.warn(
            f"Could not {action}",
            status_code=status_code,
            error_type=type(error).__name__,
            error=str(error),
        )
    return HTTPException(status_code=status_code, detail=str(error))
