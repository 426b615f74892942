"""Tests for SQLAlchemy repositories."""

from __future__ import annotations

from sqlalchemy.orm import Session  # noqa: TC002

from hiretrail.adapters.sqlalchemy.repositories import (
    SqlAlchemyCalendarEventRepository,
    SqlAlchemyContactRepository,
    SqlAlchemyJobPostingRepository,
    SqlAlchemyMessageRepository,
    SqlAlchemyTrackerEntryRepository,
    SqlAlchemyUserSettingsRepository,
)
from hiretrail.domain.model import (
    CalendarEvent,
    EventType,
    JobStatus,
    Message,
    MessageType,
    Participant,
    UserSettings,
)
from tests.helpers.signals import USER_ID, at, make_application, make_company, make_contact


def test_external_record_lookup_is_scoped_by_user(sqlite_session: Session) -> None:
    repository = SqlAlchemyCalendarEventRepository(sqlite_session)
    mine = CalendarEvent(user_id=USER_ID, external_id="evt-1", title="Chat", start_time=at(1))
    theirs = CalendarEvent(user_id="user-2", external_id="evt-1", title="Chat", start_time=at(1))
    repository.add(mine)
    repository.add(theirs)
    sqlite_session.commit()

    assert repository.get_by_external_id(USER_ID, "evt-1") is mine
    assert repository.get_by_external_id("user-2", "evt-1") is theirs
    assert repository.get_by_external_id(USER_ID, "evt-2") is None


def test_calendar_event_columns_round_trip(sqlite_session: Session) -> None:
    repository = SqlAlchemyCalendarEventRepository(sqlite_session)
    event = CalendarEvent(
        user_id=USER_ID,
        external_id="evt-1",
        title="Acme Corp onsite",
        start_time=at(20),
        attendees=(Participant(email="jane@acme.com", name="Jane"),),
        event_type=EventType.ONSITE,
    )
    repository.add(event)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    stored = repository.get(event.id)

    assert stored is not None
    assert stored.start_time == at(20)
    assert stored.attendees == (Participant(email="jane@acme.com", name="Jane"),)
    assert stored.event_type is EventType.ONSITE


def test_message_columns_round_trip(sqlite_session: Session) -> None:
    repository = SqlAlchemyMessageRepository(sqlite_session)
    message = Message(
        user_id=USER_ID,
        external_id="m1",
        subject="Offer",
        sender=Participant(email="jane@acme.com"),
        recipients=(Participant(email="me@example.com"),),
        date=at(5),
        labels=("INBOX", "IMPORTANT"),
        message_type=MessageType.OFFER,
    )
    repository.add(message)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    stored = repository.get_by_external_id(USER_ID, "m1")

    assert stored is not None
    assert stored.sender == Participant(email="jane@acme.com")
    assert stored.labels == ("INBOX", "IMPORTANT")
    assert stored.message_type is MessageType.OFFER


def test_contacts_are_scoped_to_their_user(sqlite_session: Session) -> None:
    company = make_company()
    contact = make_contact(company, "Jane@Acme.com")
    sqlite_session.add_all([company, contact])
    sqlite_session.commit()

    repository = SqlAlchemyContactRepository(sqlite_session)

    assert repository.list_for_user(USER_ID) == [contact]
    assert repository.list_for_user("user-2") == []


def test_postings_are_listed_by_title(sqlite_session: Session) -> None:
    company = make_company()
    backend, _ = make_application(company, title="Backend Engineer")
    analyst, _ = make_application(company, title="Analyst")
    sqlite_session.add_all([company, backend, analyst])
    sqlite_session.commit()

    repository = SqlAlchemyJobPostingRepository(sqlite_session)

    assert repository.list_for_company(USER_ID, company.id) == [analyst, backend]


def test_compare_and_set_status(sqlite_session: Session) -> None:
    company = make_company()
    posting, _ = make_application(company)
    sqlite_session.add_all([company, posting])
    sqlite_session.commit()
    repository = SqlAlchemyJobPostingRepository(sqlite_session)

    assert repository.compare_and_set_status(posting.id, expected=None, new=JobStatus.APPLIED)
    assert posting.status is JobStatus.APPLIED
    assert not repository.compare_and_set_status(
        posting.id, expected=None, new=JobStatus.INTERVIEWING
    )
    assert repository.compare_and_set_status(
        posting.id, expected=JobStatus.APPLIED, new=JobStatus.INTERVIEWING
    )
    sqlite_session.commit()

    assert repository.current_status(posting.id) is JobStatus.INTERVIEWING


def test_tracker_and_settings_lookups(sqlite_session: Session) -> None:
    company = make_company()
    posting, entry = make_application(company)
    settings = UserSettings(user_id=USER_ID, calendar_last_sync_at=at(3))
    sqlite_session.add_all([company, posting, entry, settings])
    sqlite_session.commit()

    trackers = SqlAlchemyTrackerEntryRepository(sqlite_session)
    settings_repository = SqlAlchemyUserSettingsRepository(sqlite_session)

    assert trackers.get_for_company(USER_ID, company.id) is entry
    assert trackers.get_for_company("user-2", company.id) is None
    stored = settings_repository.get_for_user(USER_ID)
    assert stored is settings
    assert stored.calendar_last_sync_at == at(3)
    assert settings_repository.get_for_user("user-2") is None
