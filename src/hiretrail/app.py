"""Application orchestration entry points."""

from __future__ import annotations

import csv
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from hiretrail.adapters.gmail import GmailFetcher
from hiretrail.adapters.google_calendar import GoogleCalendarFetcher
from hiretrail.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from hiretrail.config import get_google_config, get_sync_config, require_env_vars
from hiretrail.domain.data_integration import (
    SyncResult,
    UnitOfWorkFactory,
    sync_calendar_events,
    sync_messages,
)
from hiretrail.domain.time_windows import SyncWindow
from hiretrail.domain.tracker import TrackerImportResult, TrackerRow, import_tracker_rows

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime
    from pathlib import Path

    from hiretrail.config import GoogleConfig, SyncConfig
    from hiretrail.domain.ports.fetching import CalendarFetcher, MailFetcher
    from hiretrail.domain.ports.indexing import SignalIndex

log = getLogger(__name__)

FIRST_SYNC_LOOKBACK = timedelta(days=30)

type SyncTimeAttribute = Literal["calendar_last_sync_at", "messages_last_sync_at"]


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def _resolve_window(
    window: SyncWindow | None,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    user_id: str,
    attribute: SyncTimeAttribute,
) -> tuple[datetime | None, datetime | None]:
    if window is None:
        with unit_of_work_factory() as uow:
            settings = uow.repositories.settings.get_for_user(user_id)
        last_sync = getattr(settings, attribute) if settings is not None else None
        window = SyncWindow.since(last_sync, fallback=FIRST_SYNC_LOOKBACK)
    return window.resolve()


def _identity(
    google_config: GoogleConfig | None,
    user_id: str | None,
    user_email: str | None,
) -> tuple[str, str | None]:
    if user_id is not None:
        return user_id, user_email
    config = google_config or get_google_config()
    return config.user_id, user_email or config.user_email


def sync_google_calendar(
    *,
    window: SyncWindow | None = None,
    fetcher: CalendarFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    user_id: str | None = None,
    user_email: str | None = None,
    google_config: GoogleConfig | None = None,
    sync_config: SyncConfig | None = None,
    index: SignalIndex | None = None,
) -> SyncResult:
    """Synchronise Google Calendar events using the configured adapters.

    Without an explicit window the run continues from the last successful calendar
    sync, or looks back ``FIRST_SYNC_LOOKBACK`` on the first run.
    """

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    if fetcher is None:
        google_config = google_config or get_google_config()
        fetcher = GoogleCalendarFetcher(config=google_config)
    effective_user, effective_email = _identity(google_config, user_id, user_email)
    start, end = _resolve_window(
        window,
        unit_of_work_factory=effective_uow,
        user_id=effective_user,
        attribute="calendar_last_sync_at",
    )
    log.info(f"Starting calendar sync for {effective_user}: from={start}, to={end}")

    return sync_calendar_events(
        fetcher=fetcher,
        unit_of_work_factory=effective_uow,
        user_id=effective_user,
        start=start,
        end=end,
        user_email=effective_email,
        config=sync_config or get_sync_config(),
        index=index,
    )


def sync_gmail(
    *,
    window: SyncWindow | None = None,
    fetcher: MailFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    user_id: str | None = None,
    user_email: str | None = None,
    google_config: GoogleConfig | None = None,
    sync_config: SyncConfig | None = None,
    index: SignalIndex | None = None,
) -> SyncResult:
    """Synchronise Gmail messages and threads using the configured adapters."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    if fetcher is None:
        google_config = google_config or get_google_config()
        fetcher = GmailFetcher(config=google_config)
    effective_user, effective_email = _identity(google_config, user_id, user_email)
    start, end = _resolve_window(
        window,
        unit_of_work_factory=effective_uow,
        user_id=effective_user,
        attribute="messages_last_sync_at",
    )
    log.info(f"Starting mail sync for {effective_user}: from={start}, to={end}")

    return sync_messages(
        fetcher=fetcher,
        unit_of_work_factory=effective_uow,
        user_id=effective_user,
        start=start,
        end=end,
        user_email=effective_email,
        config=sync_config or get_sync_config(),
        index=index,
    )


def read_tracker_csv(path: Path) -> Iterator[TrackerRow]:
    """Yield tracker rows from a CSV export with a header row.

    Recognised columns: company, role, status, date_applied, notes, url. Header names
    are matched case-insensitively with spaces treated as underscores.
    """

    with path.open(newline="", encoding="utf-8-sig") as handle:
        for raw in csv.DictReader(handle):
            row = {
                key.strip().lower().replace(" ", "_"): value.strip()
                for key, value in raw.items()
                if key is not None and isinstance(value, str)
            }
            yield TrackerRow(
                company=row.get("company", ""),
                role=row.get("role") or None,
                status=row.get("status") or None,
                date_applied=row.get("date_applied") or None,
                notes=row.get("notes") or None,
                url=row.get("url") or None,
            )


def import_tracker_file(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    user_id: str | None = None,
) -> TrackerImportResult:
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    effective_user = user_id or require_env_vars(("HIRETRAIL_USER_ID",))["HIRETRAIL_USER_ID"]
    result = import_tracker_rows(
        read_tracker_csv(path),
        unit_of_work_factory=effective_uow,
        user_id=effective_user,
    )
    log.info(
        f"Finished tracker import from {path}: created={result.created_count}, "
        f"updated={result.updated_count}, skipped={result.skipped_count}, "
        f"errors={len(result.errors)}"
    )
    return result
