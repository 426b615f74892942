"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from hiretrail.domain.ports.persistence import (
        CalendarEventRepository,
        CompanyRepository,
        ContactRepository,
        JobPostingRepository,
        MessageRepository,
        MessageThreadRepository,
        TrackerEntryRepository,
        UserSettingsRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    ``commit`` raises ``DuplicateRecordError`` when a unique key was taken by a
    concurrent writer and ``PersistenceError`` for any other store failure.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class SyncRepositories(RepositoryCollection):
    """Repositories touched by calendar, mail and tracker synchronisation."""

    companies: CompanyRepository
    contacts: ContactRepository
    job_postings: JobPostingRepository
    tracker_entries: TrackerEntryRepository
    calendar_events: CalendarEventRepository
    messages: MessageRepository
    threads: MessageThreadRepository
    settings: UserSettingsRepository


type SyncUnitOfWork = UnitOfWork[SyncRepositories]
