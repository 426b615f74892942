from __future__ import annotations

from hiretrail.domain.model import (
    CalendarEvent,
    Company,
    JobPosting,
    JobStatus,
    TrackerEntry,
)
from hiretrail.domain.tracker import (
    TrackerRow,
    import_tracker_rows,
    latest_events_by_company,
    synchronize_tracker_entries,
)
from tests.helpers.signals import USER_ID, at, make_application, make_company
from tests.helpers.sync_store import FakeUnitOfWork, InMemoryStore, unit_of_work_factory


def _event(company: Company, external_id: str, title: str, day: int) -> CalendarEvent:
    return CalendarEvent(
        user_id=USER_ID,
        external_id=external_id,
        company_id=company.id,
        title=title,
        start_time=at(day),
    )


def test_latest_event_per_company() -> None:
    acme = make_company()
    globex = make_company("Globex", email_domain="globex.com")
    screen = _event(acme, "e1", "Phone screen", 10)
    onsite = _event(acme, "e2", "Onsite", 20)
    chat = _event(globex, "e3", "Coffee", 5)
    orphan = CalendarEvent(user_id=USER_ID, external_id="e4", title="Gym", start_time=at(30))

    latest = latest_events_by_company([onsite, chat, orphan, screen])

    assert latest == {acme.id: onsite, globex.id: chat}


def test_tracker_points_at_latest_stored_event(store: InMemoryStore) -> None:
    acme = make_company()
    globex = make_company("Globex", email_domain="globex.com")
    posting, entry = make_application(acme)
    onsite = _event(acme, "e2", "Acme Corp onsite", 20)
    store.seed(
        acme,
        globex,
        posting,
        entry,
        _event(acme, "e1", "Acme Corp phone screen", 10),
        onsite,
        _event(globex, "e3", "Globex coffee", 25),
    )
    uow = FakeUnitOfWork(store)

    result = synchronize_tracker_entries(uow, user_id=USER_ID)

    assert (result.examined, result.updated) == (1, 1)
    assert entry.last_event_id == onsite.id
    assert entry.last_event_title == "Acme Corp onsite"
    assert entry.last_event_date == at(20)
    assert uow.commit_calls == 1

    again = FakeUnitOfWork(store)
    assert synchronize_tracker_entries(again, user_id=USER_ID).updated == 0
    assert again.commit_calls == 0


def test_tracker_without_company_uses_posting_company(store: InMemoryStore) -> None:
    acme = make_company()
    posting, entry = make_application(acme)
    entry.company_id = None
    store.seed(acme, posting, entry, _event(acme, "e1", "Interview", 12))

    result = synchronize_tracker_entries(FakeUnitOfWork(store), user_id=USER_ID)

    assert result.updated == 1
    assert entry.last_event_title == "Interview"


def test_record_event_only_moves_forward() -> None:
    entry = TrackerEntry(user_id=USER_ID)
    first = _event(make_company(), "e1", "Onsite", 20)

    assert entry.record_event(event_id=first.id, title="Onsite", occurred_at=at(20))
    assert not entry.record_event(event_id=first.id, title="Earlier", occurred_at=at(10))
    assert not entry.record_event(event_id=first.id, title="Same time", occurred_at=at(20))
    assert entry.last_event_title == "Onsite"


def test_import_creates_companies_postings_and_entries(store: InMemoryStore) -> None:
    rows = [
        TrackerRow(
            company="Acme Corp",
            role="Backend Engineer",
            status="Offer received!!",
            date_applied="2024-01-02",
            notes="Great team",
            url="https://acme.com/jobs/1",
        ),
        TrackerRow(company="  "),
        TrackerRow(company="Globex", status="waiting"),
    ]

    result = import_tracker_rows(
        rows,
        unit_of_work_factory=unit_of_work_factory(store),
        user_id=USER_ID,
    )

    assert (result.total, result.created_count, result.updated_count) == (3, 2, 0)
    assert result.skipped_count == 1
    assert result.errors == []
    assert sorted(company.name for company in store.all(Company)) == ["Acme Corp", "Globex"]
    postings = {posting.title: posting for posting in store.all(JobPosting)}
    assert postings["Backend Engineer"].status is JobStatus.OFFER
    assert postings["Backend Engineer"].url == "https://acme.com/jobs/1"
    assert postings["Unspecified role"].status is None
    entries = {entry.role: entry for entry in store.all(TrackerEntry)}
    assert entries["Backend Engineer"].date_applied_raw == "2024-01-02"
    assert entries["Backend Engineer"].notes == "Great team"
    assert entries["Backend Engineer"].job_posting_id == postings["Backend Engineer"].id


def test_reimport_updates_in_place(store: InMemoryStore) -> None:
    rows = [TrackerRow(company="Acme Corp", role="Backend Engineer", status="applied")]
    factory = unit_of_work_factory(store)
    import_tracker_rows(rows, unit_of_work_factory=factory, user_id=USER_ID)

    result = import_tracker_rows(
        [TrackerRow(company="ACME corp", role="backend engineer", status="phone screen")],
        unit_of_work_factory=factory,
        user_id=USER_ID,
    )

    assert (result.created_count, result.updated_count) == (0, 1)
    assert len(store.all(Company)) == 1
    (posting,) = store.all(JobPosting)
    assert posting.status is JobStatus.INTERVIEWING
    assert len(store.all(TrackerEntry)) == 1


def test_rows_for_the_same_new_company_share_it(store: InMemoryStore) -> None:
    rows = [
        TrackerRow(company="Initech", role="Analyst"),
        TrackerRow(company="Initech", role="Engineer"),
    ]

    result = import_tracker_rows(
        rows,
        unit_of_work_factory=unit_of_work_factory(store),
        user_id=USER_ID,
    )

    assert result.created_count == 2
    assert len(store.all(Company)) == 1
    assert {posting.company_id for posting in store.all(JobPosting)} == {
        store.all(Company)[0].id
    }


def test_failed_row_is_reported_and_import_continues(store: InMemoryStore) -> None:
    store.fail_next_commit = RuntimeError("disk full")

    result = import_tracker_rows(
        [TrackerRow(company="Acme Corp"), TrackerRow(company="Globex")],
        unit_of_work_factory=unit_of_work_factory(store),
        user_id=USER_ID,
    )

    assert result.created_count == 1
    assert [(error.external_id, error.message) for error in result.errors] == [
        ("Acme Corp", "disk full")
    ]
    assert [company.name for company in store.all(Company)] == ["Globex"]
