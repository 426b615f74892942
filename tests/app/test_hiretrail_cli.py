from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from hiretrail.domain.data_integration import SyncResult
from hiretrail.domain.errors import AuthExpiredError, PageTooLargeError, SyncItemError
from hiretrail.domain.time_windows import SyncWindow
from hiretrail.domain.tracker import TrackerImportResult
from hiretrail.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path


def _capture_sync(
    monkeypatch: pytest.MonkeyPatch,
    name: str,
    result: SyncResult | None = None,
) -> dict[str, object]:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> SyncResult:
        captured.update(kwargs)
        return result or SyncResult()

    monkeypatch.setattr(cli_module, name, fake_sync)
    return captured


def _window(value: object) -> SyncWindow:
    assert isinstance(value, SyncWindow)
    return value


def test_calendar_without_window_defers_to_last_sync(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_sync(monkeypatch, "sync_google_calendar")

    cli_module.main(["calendar"])

    assert captured["window"] is None


def test_date_only_end_covers_the_whole_day(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_sync(monkeypatch, "sync_gmail")

    cli_module.main(["mail", "--start", "2024-01-01", "--end", "2024-01-31"])

    start, end = _window(captured["window"]).resolve()
    assert start == datetime(2024, 1, 1, tzinfo=UTC)
    assert end == datetime(2024, 1, 31, 23, 59, 59, tzinfo=UTC)


def test_timestamps_are_normalised_to_utc(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_sync(monkeypatch, "sync_google_calendar")

    cli_module.main(
        [
            "calendar",
            "--start",
            "2025-01-01T03:00:00+03:00",
            "--end",
            "2025-01-02T00:00:00Z",
            "--lookback-hours",
            "2.5",
        ]
    )

    window = _window(captured["window"])
    assert window.lookback == timedelta(hours=2.5)
    assert window.resolve() == (
        datetime(2025, 1, 1, 21, 30, tzinfo=UTC),
        datetime(2025, 1, 2, tzinfo=UTC),
    )


@pytest.mark.parametrize(
    "argv",
    [
        ["calendar", "--start", "not-a-date"],
        ["mail", "--lookback-hours", "-1"],
        ["calendar", "--start", "2024-02-01", "--end", "2024-01-01"],
    ],
)
def test_invalid_window_exits_with_usage_error(
    monkeypatch: pytest.MonkeyPatch,
    argv: list[str],
) -> None:
    _capture_sync(monkeypatch, "sync_google_calendar")
    _capture_sync(monkeypatch, "sync_gmail")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(argv)

    assert excinfo.value.code == 2


def test_result_is_printed_as_json(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    result = SyncResult(total=3, created_count=1, updated_count=1, skipped_count=1)
    result.errors.append(SyncItemError("m3", "could not fetch"))
    _capture_sync(monkeypatch, "sync_gmail", result)

    cli_module.main(["mail"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["total"] == 3
    assert payload["created"] == 1
    assert payload["skipped"] == 1
    assert payload["errors"] == [{"externalId": "m3", "message": "could not fetch"}]


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (AuthExpiredError("Gmail"), 401),
        (PageTooLargeError(source="Gmail", count=250, limit=200), 400),
        (RuntimeError("database is locked"), 500),
    ],
)
def test_failures_report_boundary_status(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    error: Exception,
    status: int,
) -> None:
    def failing_sync(**_: object) -> SyncResult:
        raise error

    monkeypatch.setattr(cli_module, "sync_gmail", failing_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["mail"])

    assert excinfo.value.code == 1
    assert f"(status {status})" in capsys.readouterr().err


def test_tracker_import_passes_path(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
) -> None:
    received: list[Path] = []

    def fake_import(path: Path) -> TrackerImportResult:
        received.append(path)
        return TrackerImportResult(total=2, created_count=2)

    monkeypatch.setattr(cli_module, "import_tracker_file", fake_import)
    sheet = tmp_path / "tracker.csv"

    cli_module.main(["tracker-import", str(sheet)])

    assert received == [sheet]
    assert json.loads(capsys.readouterr().out)["created"] == 2

