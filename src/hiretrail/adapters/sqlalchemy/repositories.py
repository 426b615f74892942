"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import select, update
from sqlalchemy.orm.attributes import set_committed_value

from hiretrail.adapters.sqlalchemy.mappings import (
    calendar_event_table,
    company_table,
    contact_table,
    job_posting_table,
    message_table,
    message_thread_table,
    tracker_entry_table,
    user_settings_table,
)
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

    from sqlalchemy import CursorResult, Table
    from sqlalchemy.orm import Session

    from hiretrail.domain.model import JobStatus


class SqlAlchemyRepository[TEntity: Entity]:
    """Shared helpers for repositories of user-owned records."""

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, entity_id: UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)

    def list_for_user(self, user_id: str) -> list[TEntity]:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.user_id == user_id)
            .order_by(self._table.c.id)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyExternalRecordRepository[TRecord: ExternalRecord](SqlAlchemyRepository[TRecord]):
    def get_by_external_id(self, user_id: str, external_id: str) -> TRecord | None:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.user_id == user_id)
            .where(self._table.c.external_id == external_id)
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyCompanyRepository(SqlAlchemyRepository[Company]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Company, company_table)


class SqlAlchemyContactRepository(SqlAlchemyRepository[Contact]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Contact, contact_table)


class SqlAlchemyJobPostingRepository(SqlAlchemyRepository[JobPosting]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, JobPosting, job_posting_table)

    def list_for_company(self, user_id: str, company_id: UUID) -> list[JobPosting]:
        stmt = (
            select(JobPosting)
            .where(job_posting_table.c.user_id == user_id)
            .where(job_posting_table.c.company_id == company_id)
            .order_by(job_posting_table.c.title, job_posting_table.c.id)
        )
        return list(self.session.execute(stmt).scalars())

    def current_status(self, posting_id: UUID) -> JobStatus | None:
        stmt = select(job_posting_table.c.status).where(job_posting_table.c.id == posting_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def compare_and_set_status(
        self,
        posting_id: UUID,
        *,
        expected: JobStatus | None,
        new: JobStatus,
    ) -> bool:
        status_column = job_posting_table.c.status
        guard = status_column.is_(None) if expected is None else status_column == expected
        stmt = (
            update(job_posting_table)
            .where(job_posting_table.c.id == posting_id)
            .where(guard)
            .values(status=new)
        )
        result = cast("CursorResult[Any]", self.session.execute(stmt))
        if result.rowcount != 1:
            return False
        loaded = self.session.get(JobPosting, posting_id)
        if loaded is not None:
            set_committed_value(loaded, "status", new)
        return True


class SqlAlchemyTrackerEntryRepository(SqlAlchemyRepository[TrackerEntry]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, TrackerEntry, tracker_entry_table)

    def get_for_company(self, user_id: str, company_id: UUID) -> TrackerEntry | None:
        stmt = (
            select(TrackerEntry)
            .where(tracker_entry_table.c.user_id == user_id)
            .where(tracker_entry_table.c.company_id == company_id)
            .order_by(tracker_entry_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyCalendarEventRepository(SqlAlchemyExternalRecordRepository[CalendarEvent]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, CalendarEvent, calendar_event_table)


class SqlAlchemyMessageRepository(SqlAlchemyExternalRecordRepository[Message]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Message, message_table)


class SqlAlchemyMessageThreadRepository(SqlAlchemyExternalRecordRepository[MessageThread]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, MessageThread, message_thread_table)


class SqlAlchemyUserSettingsRepository(SqlAlchemyRepository[UserSettings]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, UserSettings, user_settings_table)

    def get_for_user(self, user_id: str) -> UserSettings | None:
        stmt = select(UserSettings).where(user_settings_table.c.user_id == user_id)
        return self.session.execute(stmt).scalar_one_or_none()


if TYPE_CHECKING:
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

    _session_stub = cast("Session", object())
    _company_repo: CompanyRepository = SqlAlchemyCompanyRepository(_session_stub)
    _contact_repo: ContactRepository = SqlAlchemyContactRepository(_session_stub)
    _posting_repo: JobPostingRepository = SqlAlchemyJobPostingRepository(_session_stub)
    _tracker_repo: TrackerEntryRepository = SqlAlchemyTrackerEntryRepository(_session_stub)
    _event_repo: CalendarEventRepository = SqlAlchemyCalendarEventRepository(_session_stub)
    _message_repo: MessageRepository = SqlAlchemyMessageRepository(_session_stub)
    _thread_repo: MessageThreadRepository = SqlAlchemyMessageThreadRepository(_session_stub)
    _settings_repo: UserSettingsRepository = SqlAlchemyUserSettingsRepository(_session_stub)
