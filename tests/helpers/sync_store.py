"""In-memory store and unit of work mimicking the SQLAlchemy adapter's contract."""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, cast

from hiretrail.domain.errors import DuplicateRecordError, PersistenceError
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
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from hiretrail.domain.model import JobStatus


class InMemoryStore:
    """Committed state shared by every unit of work created from it.

    Adds stay pending until commit, which fails with ``DuplicateRecordError`` when an
    id or a ``(user_id, external_id)`` pair is already taken. Reads only see committed
    rows, like a session that never autoflushes.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.rows: defaultdict[type[Entity], dict[UUID, Entity]] = defaultdict(dict)
        self.commits = 0
        self.before_commit: Callable[[Sequence[Entity]], None] | None = None
        self.fail_next_commit: Exception | None = None

    def seed(self, *entities: Entity) -> None:
        for entity in entities:
            self.rows[type(entity)][entity.id] = entity

    def all[TEntity: Entity](self, entity_cls: type[TEntity]) -> list[TEntity]:
        return [cast("TEntity", row) for row in self.rows[entity_cls].values()]

    def get[TEntity: Entity](self, entity_cls: type[TEntity], entity_id: UUID) -> TEntity | None:
        return cast("TEntity | None", self.rows[entity_cls].get(entity_id))

    def commit(self, pending: Sequence[Entity]) -> None:
        if self.before_commit is not None:
            self.before_commit(pending)
        with self.lock:
            if self.fail_next_commit is not None:
                failure, self.fail_next_commit = self.fail_next_commit, None
                raise failure
            for entity in pending:
                self._check_unique(entity)
            for entity in pending:
                self.rows[type(entity)][entity.id] = entity
            self.commits += 1

    def compare_and_set_status(
        self,
        posting_id: UUID,
        *,
        expected: JobStatus | None,
        new: JobStatus,
    ) -> bool:
        with self.lock:
            posting = self.get(JobPosting, posting_id)
            if posting is None or posting.status != expected:
                return False
            posting.status = new
            return True

    def _check_unique(self, entity: Entity) -> None:
        table = self.rows[type(entity)]
        if entity.id in table:
            raise DuplicateRecordError(f"{type(entity).__name__} {entity.id} already exists")
        if isinstance(entity, ExternalRecord):
            for row in table.values():
                other = cast("ExternalRecord", row)
                if (other.user_id, other.external_id) == (entity.user_id, entity.external_id):
                    raise DuplicateRecordError(f"{entity.external_id} already exists")


class FakeRepository[TEntity: Entity]:
    def __init__(self, uow: FakeUnitOfWork, entity_cls: type[TEntity]) -> None:
        self.uow = uow
        self.store = uow.store
        self.entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.uow.pending.append(entity)

    def get(self, entity_id: UUID) -> TEntity | None:
        return self.store.get(self.entity_cls, entity_id)

    def list_for_user(self, user_id: str) -> list[TEntity]:
        return [row for row in self.store.all(self.entity_cls) if row.user_id == user_id]


class FakeExternalRecordRepository[TRecord: ExternalRecord](FakeRepository[TRecord]):
    def get_by_external_id(self, user_id: str, external_id: str) -> TRecord | None:
        for row in self.list_for_user(user_id):
            if row.external_id == external_id:
                return row
        return None


class FakeJobPostingRepository(FakeRepository[JobPosting]):
    def list_for_company(self, user_id: str, company_id: UUID) -> list[JobPosting]:
        postings = [row for row in self.list_for_user(user_id) if row.company_id == company_id]
        return sorted(postings, key=lambda posting: (posting.title, str(posting.id)))

    def current_status(self, posting_id: UUID) -> JobStatus | None:
        posting = self.get(posting_id)
        return posting.status if posting else None

    def compare_and_set_status(
        self,
        posting_id: UUID,
        *,
        expected: JobStatus | None,
        new: JobStatus,
    ) -> bool:
        return self.store.compare_and_set_status(posting_id, expected=expected, new=new)


class FakeTrackerEntryRepository(FakeRepository[TrackerEntry]):
    def get_for_company(self, user_id: str, company_id: UUID) -> TrackerEntry | None:
        for entry in self.list_for_user(user_id):
            if entry.company_id == company_id:
                return entry
        return None


class FakeUserSettingsRepository(FakeRepository[UserSettings]):
    def get_for_user(self, user_id: str) -> UserSettings | None:
        for settings in self.list_for_user(user_id):
            return settings
        return None


@dataclass(slots=True)
class FakeSyncRepositories:
    companies: FakeRepository[Company]
    contacts: FakeRepository[Contact]
    job_postings: FakeJobPostingRepository
    tracker_entries: FakeTrackerEntryRepository
    calendar_events: FakeExternalRecordRepository[CalendarEvent]
    messages: FakeExternalRecordRepository[Message]
    threads: FakeExternalRecordRepository[MessageThread]
    settings: FakeUserSettingsRepository


class FakeUnitOfWork:
    """Unit of work over an ``InMemoryStore``; rollback drops pending adds."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.pending: list[Entity] = []
        self.commit_calls = 0
        self.rollback_calls = 0
        self.repositories = FakeSyncRepositories(
            companies=FakeRepository(self, Company),
            contacts=FakeRepository(self, Contact),
            job_postings=FakeJobPostingRepository(self, JobPosting),
            tracker_entries=FakeTrackerEntryRepository(self, TrackerEntry),
            calendar_events=FakeExternalRecordRepository(self, CalendarEvent),
            messages=FakeExternalRecordRepository(self, Message),
            threads=FakeExternalRecordRepository(self, MessageThread),
            settings=FakeUserSettingsRepository(self, UserSettings),
        )

    def __enter__(self) -> FakeUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: object | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commit_calls += 1
        pending, self.pending = self.pending, []
        try:
            self.store.commit(pending)
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(str(exc)) from exc

    def rollback(self) -> None:
        self.rollback_calls += 1
        self.pending = []


def unit_of_work_factory(store: InMemoryStore) -> Callable[[], FakeUnitOfWork]:
    def factory() -> FakeUnitOfWork:
        return FakeUnitOfWork(store)

    return factory


if TYPE_CHECKING:
    from hiretrail.domain.ports.unit_of_work import SyncUnitOfWork

    _uow_check: SyncUnitOfWork = FakeUnitOfWork(InMemoryStore())
