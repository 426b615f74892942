"""Ports for fetching calendar and mail items from external providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from hiretrail.domain.model import Participant


@dataclass(frozen=True, slots=True)
class CalendarEventRecord:
    """Provider-neutral calendar event, normalised at the adapter boundary."""

    external_id: str
    title: str | None
    start: datetime | None
    end: datetime | None = None
    description: str | None = None
    location: str | None = None
    attendees: tuple[Participant, ...] = ()
    status: str | None = None


@dataclass(frozen=True, slots=True)
class MailMessageRecord:
    """Provider-neutral mail message, normalised at the adapter boundary."""

    external_id: str
    thread_external_id: str | None
    subject: str
    body: str
    sender: Participant | None
    recipients: tuple[Participant, ...]
    date: datetime | None
    labels: tuple[str, ...] = ()


@dataclass(slots=True)
class CalendarFetchResult:
    events: Sequence[CalendarEventRecord]


@dataclass(slots=True)
class MailFetchResult:
    messages: Sequence[MailMessageRecord]
    # ids listed by the provider whose full message could not be retrieved
    failed_ids: Sequence[str] = field(default_factory=list[str])


@runtime_checkable
class CalendarFetcher(Protocol):
    """Return at most ``limit`` events in the window or raise ``PageTooLargeError``."""

    def __call__(
        self,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 200,
    ) -> CalendarFetchResult: ...


@runtime_checkable
class MailFetcher(Protocol):
    """Return at most ``limit`` messages in the window or raise ``PageTooLargeError``."""

    def __call__(
        self,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 200,
    ) -> MailFetchResult: ...


__all__ = [
    "CalendarEventRecord",
    "CalendarFetchResult",
    "CalendarFetcher",
    "MailFetchResult",
    "MailFetcher",
    "MailMessageRecord",
]
