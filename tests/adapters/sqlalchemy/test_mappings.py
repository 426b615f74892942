from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, inspect, text

from hiretrail.adapters.sqlalchemy import create_all_tables, start_mappers
from hiretrail.domain.model import JobStatus
from tests.helpers.signals import make_application, make_company

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session

TABLES = {
    "company",
    "contact",
    "job_posting",
    "tracker_entry",
    "calendar_event",
    "message_thread",
    "message",
    "user_settings",
}


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture; calling again should be harmless.
    start_mappers()
    start_mappers()


def test_migrations_create_every_mapped_table(sqlite_engine: Engine) -> None:
    inspector = inspect(sqlite_engine)

    assert TABLES <= set(inspector.get_table_names())
    unique = {
        tuple(constraint["column_names"])
        for constraint in inspector.get_unique_constraints("calendar_event")
    }
    assert ("user_id", "external_id") in unique


def test_create_all_tables_matches_migrations() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        create_all_tables(engine)
        assert TABLES <= set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


def test_status_is_stored_by_value(sqlite_session: Session) -> None:
    company = make_company()
    posting, _ = make_application(company, status=JobStatus.INTERVIEWING)
    sqlite_session.add_all([company, posting])
    sqlite_session.commit()

    raw = sqlite_session.execute(text("SELECT status FROM job_posting")).scalar_one()

    assert raw == "interviewing"
