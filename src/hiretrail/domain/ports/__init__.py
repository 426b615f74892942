"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    CalendarEventRecord,
    CalendarFetcher,
    CalendarFetchResult,
    MailFetcher,
    MailFetchResult,
    MailMessageRecord,
)
from .indexing import NullSignalIndex, SignalIndex
from .persistence import (
    CalendarEventRepository,
    CompanyRepository,
    ContactRepository,
    ExternalRecordRepository,
    JobPostingRepository,
    MessageRepository,
    MessageThreadRepository,
    Repository,
    TrackerEntryRepository,
    UserScopedRepository,
    UserSettingsRepository,
)
from .unit_of_work import RepositoryCollection, SyncRepositories, SyncUnitOfWork, UnitOfWork

__all__ = [
    "CalendarEventRecord",
    "CalendarEventRepository",
    "CalendarFetchResult",
    "CalendarFetcher",
    "CompanyRepository",
    "ContactRepository",
    "ExternalRecordRepository",
    "JobPostingRepository",
    "MailFetchResult",
    "MailFetcher",
    "MailMessageRecord",
    "MessageRepository",
    "MessageThreadRepository",
    "NullSignalIndex",
    "Repository",
    "RepositoryCollection",
    "SignalIndex",
    "SyncRepositories",
    "SyncUnitOfWork",
    "TrackerEntryRepository",
    "UnitOfWork",
    "UserScopedRepository",
    "UserSettingsRepository",
]
