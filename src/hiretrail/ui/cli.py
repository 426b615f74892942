# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, date, datetime, time, timedelta
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from hiretrail.app import import_tracker_file, sync_gmail, sync_google_calendar
from hiretrail.config import configure_logging
from hiretrail.domain.errors import boundary_status
from hiretrail.domain.time_windows import SyncWindow

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_window_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--start",
        type=str,
        help="ISO-8601 date or timestamp (UTC) marking the inclusive start of the window",
    )
    parser.add_argument(
        "--end",
        type=str,
        help="ISO-8601 date or timestamp (UTC); a bare date covers the whole day",
    )
    parser.add_argument(
        "--lookback-hours",
        type=float,
        help="Relative lookback window in hours (overrides start if larger)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hiretrail",
        description="Sync job-search signals from Google Calendar and Gmail",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    calendar = subparsers.add_parser("calendar", help="Sync Google Calendar events")
    _add_window_arguments(calendar)

    mail = subparsers.add_parser("mail", help="Sync Gmail messages")
    _add_window_arguments(mail)

    tracker = subparsers.add_parser("tracker-import", help="Import tracking rows from CSV")
    tracker.add_argument("path", type=Path, help="CSV file with a header row")

    return parser.parse_args(list(argv))


def _parse_boundary(value: str, *, end_of_day: bool) -> datetime:
    normalized = value.strip()
    try:
        if len(normalized) == len("YYYY-MM-DD"):
            day = date.fromisoformat(normalized)
            moment = time(23, 59, 59) if end_of_day else time.min
            return datetime.combine(day, moment, tzinfo=UTC)
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date or timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _build_sync_window(args: argparse.Namespace) -> SyncWindow | None:
    start = _parse_boundary(args.start, end_of_day=False) if args.start else None
    end = _parse_boundary(args.end, end_of_day=True) if args.end else None
    lookback = None
    if args.lookback_hours is not None:
        if args.lookback_hours < 0:
            raise ValueError("Lookback hours must be non-negative")
        lookback = timedelta(hours=args.lookback_hours)
    if all(value is None for value in (start, end, lookback)):
        return None
    window = SyncWindow(start=start, end=end, lookback=lookback)
    window.resolve()
    return window


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    window: SyncWindow | None = None
    response: dict[str, object]
    try:
        parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
        if parsed_args.command in {"calendar", "mail"}:
            window = _build_sync_window(parsed_args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "calendar":
            response = sync_google_calendar(window=window).as_response()
        elif parsed_args.command == "mail":
            response = sync_gmail(window=window).as_response()
        else:
            imported = import_tracker_file(parsed_args.path)
            response = {
                "total": imported.total,
                "created": imported.created_count,
                "updated": imported.updated_count,
                "skipped": imported.skipped_count,
                "errors": [
                    {"externalId": error.external_id, "message": error.message}
                    for error in imported.errors
                ],
            }
    except Exception as e:  # noqa: BLE001
        log.debug("Command failed", exc_info=True)
        print(f"Error: {e} (status {boundary_status(e)})", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(response, indent=2))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
