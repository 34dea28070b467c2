"""Unit tests for domain error to HTTP status mapping."""

import pytest

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
from banter.interface.api.errors import http_error, status_code_for


@pytest.mark.parametrize(
    "error,expected_status",
    [
        (ValidationError("bad input"), 400),
        (NotAuthorizedError("Comment", "c1", "u1"), 403),
        (NotFoundError("Comment", "c1"), 404),
        (ContentDeletedException("Comment", "c1"), 409),
        (ContentNotActiveError("Comment", "c1", "hidden"), 409),
        (ConflictError("Comment", "c1", 3), 409),
        (CascadeDeleteError("c1", {"c2": RuntimeError("boom")}), 500),
        (DomainError("unexpected"), 500),
    ],
)
def test_status_code_for(error, expected_status):
    assert status_code_for(error) == expected_status


def test_http_error_carries_status_and_message():
    error = ContentDeletedException("Comment", "c1")

    exc = http_error(error, "edit comment")

    assert exc.status_code == 409
    assert exc.detail == str(error)
