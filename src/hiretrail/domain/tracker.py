"""Tracker-row synchronisation and manual tracker imports."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from hiretrail.domain.classification.inference import normalize_status_label
from hiretrail.domain.contacts import find_or_create_company
from hiretrail.domain.errors import PersistenceError, SyncItemError
from hiretrail.domain.identity.normalize import name_key
from hiretrail.domain.model import JobPosting, RecordKind, TrackerEntry
from hiretrail.domain.upsert import internal_id_for

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from uuid import UUID

    from hiretrail.domain.model import CalendarEvent, Company
    from hiretrail.domain.ports.unit_of_work import SyncUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class TrackerSyncResult:
    examined: int = 0
    updated: int = 0


def latest_events_by_company(events: Iterable[CalendarEvent]) -> dict[UUID, CalendarEvent]:
    latest: dict[UUID, CalendarEvent] = {}
    for event in events:
        if event.company_id is None:
            continue
        current = latest.get(event.company_id)
        if current is None or (event.start_time, event.external_id) > (
            current.start_time,
            current.external_id,
        ):
            latest[event.company_id] = event
    return latest


def synchronize_tracker_entries(uow: SyncUnitOfWork, *, user_id: str) -> TrackerSyncResult:
    """Point each tracker entry at its company's most recent calendar event.

    Computed over every stored event of the user, not only the current batch.
    """

    repositories = uow.repositories
    latest = latest_events_by_company(repositories.calendar_events.list_for_user(user_id))
    result = TrackerSyncResult()
    for entry in repositories.tracker_entries.list_for_user(user_id):
        result.examined += 1
        company_id = entry.company_id
        if company_id is None and entry.job_posting_id is not None:
            posting = repositories.job_postings.get(entry.job_posting_id)
            company_id = posting.company_id if posting else None
        event = latest.get(company_id) if company_id is not None else None
        if event is None:
            continue
        if entry.record_event(event_id=event.id, title=event.title, occurred_at=event.start_time):
            result.updated += 1
    if result.updated:
        uow.commit()
        log.info("Updated last event on %s of %s tracker entries", result.updated, result.examined)
    return result


@dataclass(frozen=True, slots=True)
class TrackerRow:
    """A hand-maintained tracking row, as typed by the user."""

    company: str
    role: str | None = None
    status: str | None = None
    date_applied: str | None = None
    notes: str | None = None
    url: str | None = None


@dataclass(slots=True)
class TrackerImportResult:
    total: int = 0
    created_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0
    errors: list[SyncItemError] = field(default_factory=list[SyncItemError])


def import_tracker_rows(
    rows: Iterable[TrackerRow],
    *,
    unit_of_work_factory: Callable[[], SyncUnitOfWork],
    user_id: str,
) -> TrackerImportResult:
    """Store tracking rows as explicit user writes.

    Postings and tracker entries are keyed by (user, company, role), so importing the
    same sheet again updates in place. A recognised status label is written as is,
    bypassing reconciliation.
    """

    result = TrackerImportResult()
    with unit_of_work_factory() as uow:
        companies = uow.repositories.companies.list_for_user(user_id)
        for row in rows:
            result.total += 1
            if not row.company.strip():
                result.skipped_count += 1
                continue
            try:
                company, company_created, posting_created = _import_row(
                    uow, row, user_id=user_id, companies=companies
                )
                uow.commit()
            except PersistenceError as exc:
                uow.rollback()
                log.warning("Could not import tracker row for %s: %s", row.company, exc)
                result.errors.append(SyncItemError(row.company, str(exc)))
                companies = uow.repositories.companies.list_for_user(user_id)
                continue
            if company_created:
                companies.append(company)
            if posting_created:
                result.created_count += 1
            else:
                result.updated_count += 1
    return result


def _import_row(
    uow: SyncUnitOfWork,
    row: TrackerRow,
    *,
    user_id: str,
    companies: list[Company],
) -> tuple[Company, bool, bool]:
    repositories = uow.repositories
    company, company_created = find_or_create_company(
        uow, user_id=user_id, name=row.company, known=companies
    )
    role = (row.role or "").strip() or "Unspecified role"
    key = f"{name_key(company.name)}:{name_key(role)}"
    status = normalize_status_label(row.status)

    posting_id = internal_id_for(RecordKind.JOB_POSTING, user_id, key)
    posting = repositories.job_postings.get(posting_id)
    created = posting is None
    if posting is None:
        posting = JobPosting(id=posting_id, user_id=user_id, company_id=company.id, title=role)
        repositories.job_postings.add(posting)
    if row.url:
        posting.url = row.url
    if status is not None:
        posting.status = status

    entry_id = internal_id_for(RecordKind.TRACKER_ENTRY, user_id, key)
    entry = repositories.tracker_entries.get(entry_id)
    if entry is None:
        entry = TrackerEntry(id=entry_id, user_id=user_id)
        repositories.tracker_entries.add(entry)
    entry.job_posting_id = posting.id
    entry.company_id = company.id
    entry.role = role
    if row.date_applied:
        entry.date_applied_raw = row.date_applied
    if row.notes:
        entry.notes = row.notes
    return company, company_created, created
