"""Ports for persisting domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from hiretrail.domain.model import (
    CalendarEvent,
    Company,
    Contact,
    Entity,
    ExternalRecord,
    JobPosting,
    Message,
    MessageThread,
    TrackerEntry,
    UserSettings,
)

if TYPE_CHECKING:
    from uuid import UUID

    from hiretrail.domain.model import JobStatus


@runtime_checkable
class Repository[TEntity: Entity](Protocol):
    """Minimal repository contract for a persistent record store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class UserScopedRepository[TEntity: Entity](Repository[TEntity], Protocol):
    def list_for_user(self, user_id: str) -> list[TEntity]: ...


@runtime_checkable
class ExternalRecordRepository[TRecord: ExternalRecord](UserScopedRepository[TRecord], Protocol):
    """Records mirrored from a provider; ``(user_id, external_id)`` is unique."""

    def get_by_external_id(self, user_id: str, external_id: str) -> TRecord | None: ...


@runtime_checkable
class CompanyRepository(UserScopedRepository[Company], Protocol):
    """Repository contract for companies."""


@runtime_checkable
class ContactRepository(UserScopedRepository[Contact], Protocol):
    """Repository contract for contacts."""


@runtime_checkable
class JobPostingRepository(UserScopedRepository[JobPosting], Protocol):
    def list_for_company(self, user_id: str, company_id: UUID) -> list[JobPosting]: ...

    def current_status(self, posting_id: UUID) -> JobStatus | None:
        """Read the stored status directly from the store, bypassing cached instances."""
        ...

    def compare_and_set_status(
        self,
        posting_id: UUID,
        *,
        expected: JobStatus | None,
        new: JobStatus,
    ) -> bool:
        """Write ``new`` only while the stored status still equals ``expected``."""
        ...


@runtime_checkable
class TrackerEntryRepository(UserScopedRepository[TrackerEntry], Protocol):
    def get_for_company(self, user_id: str, company_id: UUID) -> TrackerEntry | None: ...


@runtime_checkable
class CalendarEventRepository(ExternalRecordRepository[CalendarEvent], Protocol):
    """Repository contract for calendar events."""


@runtime_checkable
class MessageRepository(ExternalRecordRepository[Message], Protocol):
    """Repository contract for mail messages."""


@runtime_checkable
class MessageThreadRepository(ExternalRecordRepository[MessageThread], Protocol):
    """Repository contract for mail threads."""


@runtime_checkable
class UserSettingsRepository(Repository[UserSettings], Protocol):
    def get_for_user(self, user_id: str) -> UserSettings | None: ...
