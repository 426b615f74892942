from __future__ import annotations

import pytest

from hiretrail.domain.errors import (
    AuthExpiredError,
    DuplicateRecordError,
    PageTooLargeError,
    PersistenceError,
    boundary_status,
)


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (AuthExpiredError("Gmail"), 401),
        (PageTooLargeError(source="mail", count=201, limit=200), 400),
        (PersistenceError("boom"), 500),
        (DuplicateRecordError("dup"), 500),
        (RuntimeError("unexpected"), 500),
    ],
)
def test_boundary_status(error: Exception, status: int) -> None:
    assert boundary_status(error) == status


def test_page_too_large_names_the_source_and_counts() -> None:
    error = PageTooLargeError(source="calendar", count=250, limit=200)

    assert "calendar returned 250 items" in str(error)
    assert "narrow the date range" in str(error)
    assert (error.source, error.count, error.limit) == ("calendar", 250, 200)


def test_auth_expired_names_the_provider() -> None:
    error = AuthExpiredError("Google Calendar")

    assert error.provider == "Google Calendar"
    assert str(error) == "Google Calendar credentials expired or were revoked"
