"""Errors raised by sync operations and their mapping to boundary status codes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


class SyncError(RuntimeError):
    """Base class for failures a sync caller must react to."""

    status_code: ClassVar[int] = 500


class AuthExpiredError(SyncError):
    """The provider rejected the stored credential; re-authorise instead of retrying."""

    status_code: ClassVar[int] = 401

    def __init__(self, provider: str) -> None:
        super().__init__(f"{provider} credentials expired or were revoked")
        self.provider = provider


class PageTooLargeError(SyncError):
    """A sync window holds more items than one invocation may process."""

    status_code: ClassVar[int] = 400

    def __init__(self, *, source: str, count: int, limit: int) -> None:
        super().__init__(
            f"{source} returned {count} items, more than the limit of {limit}; "
            "narrow the date range"
        )
        self.source = source
        self.count = count
        self.limit = limit


class PersistenceError(SyncError):
    """A write against the store failed."""


class DuplicateRecordError(PersistenceError):
    """A concurrent writer inserted the same record first."""


@dataclass(frozen=True, slots=True)
class SyncItemError:
    """Failure confined to a single item of a sync batch."""

    external_id: str
    message: str


def boundary_status(exc: BaseException) -> int:
    if isinstance(exc, SyncError):
        return exc.status_code
    return 500


__all__ = [
    "AuthExpiredError",
    "DuplicateRecordError",
    "PageTooLargeError",
    "PersistenceError",
    "SyncError",
    "SyncItemError",
    "boundary_status",
]
