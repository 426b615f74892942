"""Application services for ingesting calendar events and mail."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING, Literal, cast

from hiretrail.config.sync import SyncConfig
from hiretrail.domain.classification import (
    classify_event,
    classify_message,
    infer_message_status,
    infer_status,
)
from hiretrail.domain.contacts import ContactDirectory, find_or_create_company
from hiretrail.domain.errors import PageTooLargeError, PersistenceError, SyncItemError
from hiretrail.domain.identity import (
    CompanyMatch,
    CompanyMatcher,
    MatchRule,
    company_name_from_domain,
    email_domain,
    infer_self_addresses,
    is_no_reply,
    normalize_address,
)
from hiretrail.domain.model import MessageThread, RecordKind, UserSettings
from hiretrail.domain.ports.indexing import NullSignalIndex
from hiretrail.domain.reconciliation import (
    StatusCandidate,
    StatusReconciler,
    fold_monotonic,
    replay_latest_evidence,
)
from hiretrail.domain.time_windows import utcnow
from hiretrail.domain.tracker import synchronize_tracker_entries
from hiretrail.domain.upsert import (
    UpsertOutcome,
    UpsertResult,
    commit_with_retry,
    internal_id_for,
    upsert_record,
)

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable
    from datetime import datetime
    from uuid import UUID

    from hiretrail.domain.model import Contact, ExternalRecord, Message, Participant
    from hiretrail.domain.ports.fetching import (
        CalendarEventRecord,
        CalendarFetcher,
        MailFetcher,
        MailMessageRecord,
    )
    from hiretrail.domain.ports.indexing import SignalIndex
    from hiretrail.domain.ports.unit_of_work import SyncUnitOfWork
    from hiretrail.domain.reconciliation import StatusPolicy
    from hiretrail.domain.time_windows import Clock

log = getLogger(__name__)

UnitOfWorkFactory = Callable[[], "SyncUnitOfWork"]


@dataclass(slots=True)
class SyncResult:
    """Outcome of one calendar or mail sync invocation."""

    total: int = 0
    created_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0
    new_contacts_count: int = 0
    statuses_updated: int = 0
    trackers_updated: int = 0
    errors: list[SyncItemError] = field(default_factory=list[SyncItemError])

    def record(self, outcome: UpsertOutcome) -> None:
        if outcome is UpsertOutcome.CREATED:
            self.created_count += 1
        else:
            self.updated_count += 1

    def as_response(self) -> dict[str, object]:
        return {
            "total": self.total,
            "created": self.created_count,
            "updated": self.updated_count,
            "skipped": self.skipped_count,
            "newContacts": self.new_contacts_count,
            "statusesUpdated": self.statuses_updated,
            "trackersUpdated": self.trackers_updated,
            "errors": [
                {"externalId": error.external_id, "message": error.message}
                for error in self.errors
            ],
        }


class _SyncSession:
    """Per-invocation state: matcher, contact view and the in-batch seen set."""

    def __init__(
        self,
        uow: SyncUnitOfWork,
        *,
        user_id: str,
        excluded_addresses: Collection[str],
        user_domains: Collection[str],
        config: SyncConfig,
        index: SignalIndex,
        result: SyncResult,
    ) -> None:
        self.uow = uow
        self.user_id = user_id
        self.config = config
        self.index = index
        self.result = result
        self.excluded = frozenset(address.lower() for address in excluded_addresses)
        self.seen: set[str] = set()
        self.companies = uow.repositories.companies.list_for_user(user_id)
        self.contacts = ContactDirectory(uow, user_id=user_id, excluded_addresses=self.excluded)
        self.matcher = CompanyMatcher(
            self.companies,
            self.contacts.contacts,
            user_domains=user_domains,
        )
        self.candidates: list[StatusCandidate] = []

    def first_sighting(self, external_id: str) -> bool:
        if external_id in self.seen:
            return False
        self.seen.add(external_id)
        return True

    def observable(self, participants: Iterable[Participant]) -> list[str]:
        addresses: list[str] = []
        for participant in participants:
            address = normalize_address(participant.email)
            if address is None or address in self.excluded or is_no_reply(address):
                continue
            addresses.append(address)
        return addresses

    def resolve(self, addresses: list[str], text: str | None) -> CompanyMatch | None:
        match = self.matcher.resolve(addresses, text)
        if match is not None or not self.config.create_companies_from_domains:
            return match
        return self._create_from_domain(addresses)

    def company_name(self, company_id: UUID | None) -> str | None:
        company = self.matcher.get(company_id) if company_id is not None else None
        return company.name if company else None

    def skip(self, external_id: str, reason: str) -> None:
        self.result.skipped_count += 1
        log.debug("Skipped %s: %s", external_id, reason)

    def fail(self, external_id: str, exc: Exception) -> None:
        self.uow.rollback()
        self.contacts.discard()
        log.warning("Could not store %s: %s", external_id, exc)
        self.result.errors.append(SyncItemError(external_id, str(exc)))

    def register_contacts(
        self,
        participants: Iterable[Participant],
        *,
        company_id: UUID,
        external_id: str,
    ) -> None:
        staged: list[Contact] = []
        for participant in participants:
            contact = self.contacts.register(participant, company_id=company_id)
            if contact is not None:
                staged.append(contact)
        if not staged:
            return
        try:
            self.uow.commit()
        except PersistenceError as exc:
            self.fail(external_id, exc)
            return
        for contact in self.contacts.accept():
            self.matcher.register_contact(contact)
            self.result.new_contacts_count += 1
            self.best_effort(
                "contact index",
                partial(
                    self.index.index_contact,
                    contact,
                    company_name=self.company_name(contact.company_id),
                ),
            )

    def best_effort(self, what: str, action: Callable[[], object]) -> None:
        try:
            action()
        except Exception:  # noqa: BLE001
            log.warning("Best-effort %s update failed", what, exc_info=True)

    def reconcile(self, *, policy: StatusPolicy) -> None:
        reconciler = StatusReconciler(self.uow, user_id=self.user_id)
        outcomes = reconciler.reconcile_many(self.candidates, policy=policy)
        for company_id, outcome in outcomes.items():
            if isinstance(outcome, PersistenceError):
                self.result.errors.append(SyncItemError(f"company:{company_id}", str(outcome)))
            elif outcome is not None and outcome.written:
                self.result.statuses_updated += 1

    def synchronize_trackers(self) -> None:
        try:
            tracker_result = synchronize_tracker_entries(self.uow, user_id=self.user_id)
        except PersistenceError as exc:
            self.uow.rollback()
            log.warning("Tracker synchronisation failed: %s", exc)
            self.result.errors.append(SyncItemError("tracker", str(exc)))
            return
        self.result.trackers_updated = tracker_result.updated

    def record_sync_time(
        self,
        attribute: Literal["calendar_last_sync_at", "messages_last_sync_at"],
        at: datetime,
    ) -> None:
        def write() -> None:
            repository = self.uow.repositories.settings
            settings = repository.get_for_user(self.user_id)
            if settings is None:
                settings = UserSettings(
                    id=internal_id_for(RecordKind.USER_SETTINGS, self.user_id, self.user_id),
                    user_id=self.user_id,
                )
                repository.add(settings)
            setattr(settings, attribute, at)
            self.uow.commit()

        try:
            write()
        except Exception:  # noqa: BLE001
            self.uow.rollback()
            log.warning("Could not record %s for user %s", attribute, self.user_id, exc_info=True)

    def _create_from_domain(self, addresses: list[str]) -> CompanyMatch | None:
        for address in addresses:
            domain = email_domain(address)
            if self.matcher.is_excluded_domain(domain):
                continue
            name = company_name_from_domain(domain)
            if name is None:
                continue
            company, created = find_or_create_company(
                self.uow,
                user_id=self.user_id,
                name=name,
                email_domain=domain,
                known=self.companies,
            )
            self.uow.commit()
            if created:
                self.companies.append(company)
            self.matcher.register_company(company)
            return CompanyMatch(company.id, company.name, MatchRule.CREATED_FROM_DOMAIN)
        return None


def _check_page(source: str, count: int, limit: int) -> None:
    if count > limit:
        raise PageTooLargeError(source=source, count=count, limit=limit)


def _truncate(value: str | None, limit: int) -> str | None:
    if value is None:
        return None
    return value[:limit]


def sync_calendar_events(
    *,
    fetcher: CalendarFetcher,
    unit_of_work_factory: UnitOfWorkFactory,
    user_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
    user_email: str | None = None,
    config: SyncConfig | None = None,
    index: SignalIndex | None = None,
    clock: Clock = utcnow,
) -> SyncResult:
    """Fetch a window of calendar events, resolve, classify and store them.

    Statuses are folded monotonically per company and written once; tracker entries
    are then pointed at the latest event. ``AuthExpiredError`` and
    ``PageTooLargeError`` propagate before anything is written.
    """

    sync_config = config or SyncConfig()
    limit = sync_config.calendar_page_limit
    fetched = fetcher(start=start, end=end, limit=limit)
    events = list(fetched.events)
    _check_page("calendar", len(events), limit)

    result = SyncResult(total=len(events))
    user_address = normalize_address(user_email)
    excluded = {user_address} if user_address else set()
    user_domain = email_domain(user_address)

    with unit_of_work_factory() as uow:
        session = _SyncSession(
            uow,
            user_id=user_id,
            excluded_addresses=excluded,
            user_domains={user_domain} if user_domain else set(),
            config=sync_config,
            index=index or NullSignalIndex(),
            result=result,
        )
        for record in events:
            _ingest_calendar_event(session, record)

        session.reconcile(policy=fold_monotonic)
        session.synchronize_trackers()
        session.record_sync_time("calendar_last_sync_at", clock())

    log.info(
        "Finished calendar sync: total=%s, created=%s, updated=%s, skipped=%s, errors=%s",
        result.total,
        result.created_count,
        result.updated_count,
        result.skipped_count,
        len(result.errors),
    )
    return result


def _ingest_calendar_event(session: _SyncSession, record: CalendarEventRecord) -> None:
    external_id = record.external_id
    if not external_id or not record.title or record.start is None:
        session.skip(external_id or "<missing id>", "missing id, title or start")
        return
    if not session.first_sighting(external_id):
        session.skip(external_id, "repeated within batch")
        return

    attendees = [
        attendee
        for attendee in record.attendees
        if attendee.email.lower() not in session.excluded and not is_no_reply(attendee.email)
    ]
    try:
        match = session.resolve([attendee.email for attendee in attendees], record.title)
    except PersistenceError as exc:
        session.fail(external_id, exc)
        return
    if match is None:
        session.skip(external_id, "no matching company")
        return

    event_type = classify_event(record.title, record.description)
    values: dict[str, object] = {
        "company_id": match.company_id,
        "title": record.title,
        "description": _truncate(record.description, session.config.text_max_chars),
        "start_time": record.start,
        "end_time": record.end,
        "location": record.location,
        "attendees": tuple(attendees),
        "status": record.status,
        "event_type": event_type,
    }

    def write() -> UpsertResult[ExternalRecord]:
        return upsert_record(
            session.uow,
            RecordKind.CALENDAR_EVENT,
            user_id=session.user_id,
            external_id=external_id,
            values=values,
        )

    try:
        upserted = commit_with_retry(session.uow, write)
    except PersistenceError as exc:
        session.fail(external_id, exc)
        return
    session.result.record(upserted.outcome)

    if upserted.created:
        session.register_contacts(attendees, company_id=match.company_id, external_id=external_id)

    status = infer_status(event_type)
    if status is not None:
        session.candidates.append(
            StatusCandidate(match.company_id, status, record.start, external_id)
        )


def sync_messages(
    *,
    fetcher: MailFetcher,
    unit_of_work_factory: UnitOfWorkFactory,
    user_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
    user_email: str | None = None,
    config: SyncConfig | None = None,
    index: SignalIndex | None = None,
    clock: Clock = utcnow,
) -> SyncResult:
    """Fetch a window of mail, resolve, classify and store messages and threads.

    Statuses are replayed per company with latest evidence winning, then tracker
    entries are refreshed. Messages sent by the user are skipped.
    """

    sync_config = config or SyncConfig()
    limit = sync_config.message_page_limit
    fetched = fetcher(start=start, end=end, limit=limit)
    messages = list(fetched.messages)
    _check_page("mail", len(messages), limit)

    result = SyncResult(total=len(messages) + len(fetched.failed_ids))
    for failed_id in fetched.failed_ids:
        result.errors.append(SyncItemError(failed_id, "message could not be fetched"))

    user_address = normalize_address(user_email)
    self_addresses = set(infer_self_addresses(messages, sync_config.self_address_min_share))
    if user_address:
        self_addresses.add(user_address)
    user_domain = email_domain(user_address)

    with unit_of_work_factory() as uow:
        session = _SyncSession(
            uow,
            user_id=user_id,
            excluded_addresses=self_addresses,
            user_domains={user_domain} if user_domain else set(),
            config=sync_config,
            index=index or NullSignalIndex(),
            result=result,
        )
        for record in messages:
            _ingest_message(session, record)

        session.reconcile(policy=replay_latest_evidence)
        session.synchronize_trackers()
        session.record_sync_time("messages_last_sync_at", clock())

    log.info(
        "Finished mail sync: total=%s, created=%s, updated=%s, skipped=%s, errors=%s",
        result.total,
        result.created_count,
        result.updated_count,
        result.skipped_count,
        len(result.errors),
    )
    return result


def _ingest_message(session: _SyncSession, record: MailMessageRecord) -> None:
    external_id = record.external_id
    if not external_id or record.date is None:
        session.skip(external_id or "<missing id>", "missing id or date")
        return
    if not session.first_sighting(external_id):
        session.skip(external_id, "repeated within batch")
        return
    sender_address = normalize_address(record.sender.email) if record.sender else None
    if sender_address is not None and sender_address in session.excluded:
        session.skip(external_id, "sent by the user")
        return

    participants = [*([record.sender] if record.sender else []), *record.recipients]
    body_prefix = record.body[: session.config.body_match_chars]
    text = f"{record.subject}\n{body_prefix}"
    try:
        match = session.resolve(session.observable(participants), text)
    except PersistenceError as exc:
        session.fail(external_id, exc)
        return
    if match is None:
        session.skip(external_id, "no matching company")
        return

    message_type = classify_message(record.subject, record.body, sender_address)
    thread_external_id = record.thread_external_id or external_id
    values: dict[str, object] = {
        "thread_id": internal_id_for(
            RecordKind.MESSAGE_THREAD, session.user_id, thread_external_id
        ),
        "thread_external_id": thread_external_id,
        "company_id": match.company_id,
        "subject": record.subject,
        "sender": record.sender,
        "recipients": record.recipients,
        "date": record.date,
        "body": _truncate(record.body, session.config.text_max_chars) or "",
        "labels": record.labels,
        "message_type": message_type,
    }

    def write() -> UpsertResult[ExternalRecord]:
        upserted = upsert_record(
            session.uow,
            RecordKind.MESSAGE,
            user_id=session.user_id,
            external_id=external_id,
            values=values,
        )
        _absorb_into_thread(
            session,
            cast("Message", upserted.record),
            thread_external_id,
            first_delivery=upserted.created,
        )
        return upserted

    try:
        upserted = commit_with_retry(session.uow, write)
    except PersistenceError as exc:
        session.fail(external_id, exc)
        return
    session.result.record(upserted.outcome)

    if upserted.created and record.sender is not None:
        session.register_contacts(
            (record.sender,), company_id=match.company_id, external_id=external_id
        )
    session.best_effort(
        "message index",
        partial(
            session.index.index_message,
            cast("Message", upserted.record),
            company_name=match.name,
        ),
    )

    status = infer_message_status(message_type, record.subject, record.body)
    if status is not None:
        session.candidates.append(
            StatusCandidate(match.company_id, status, record.date, external_id)
        )


def _absorb_into_thread(
    session: _SyncSession,
    message: Message,
    thread_external_id: str,
    *,
    first_delivery: bool,
) -> None:
    threads = session.uow.repositories.threads
    thread = threads.get_by_external_id(session.user_id, thread_external_id)
    if thread is None:
        thread = MessageThread(
            id=internal_id_for(RecordKind.MESSAGE_THREAD, session.user_id, thread_external_id),
            user_id=session.user_id,
            external_id=thread_external_id,
        )
        threads.add(thread)
    thread.absorb(message, first_delivery=first_delivery)


__all__ = ["SyncResult", "UnitOfWorkFactory", "sync_calendar_events", "sync_messages"]
