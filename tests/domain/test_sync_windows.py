from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from hiretrail.domain.time_windows import SyncWindow
from tests.helpers.signals import at


def _now() -> datetime:
    return at(15, 12)


def test_lookback_counts_back_from_now() -> None:
    window = SyncWindow(lookback=timedelta(hours=24))

    assert window.resolve(clock=_now) == (at(14, 12), at(15, 12))


def test_lookback_never_widens_explicit_start() -> None:
    window = SyncWindow(start=at(15, 6), end=at(15, 12), lookback=timedelta(days=3))

    assert window.resolve(clock=_now) == (at(15, 6), at(15, 12))


def test_bounds_are_converted_to_utc() -> None:
    cet = timezone(timedelta(hours=1))
    window = SyncWindow(start=datetime(2024, 1, 10, 11, tzinfo=cet))

    start, end = window.resolve(clock=_now)

    assert start == at(10, 10)
    assert start is not None
    assert start.tzinfo is UTC
    assert end is None


def test_naive_bounds_are_rejected() -> None:
    with pytest.raises(ValueError, match="timezone"):
        SyncWindow(start=datetime(2024, 1, 1)).resolve()  # noqa: DTZ001


def test_inverted_window_is_rejected() -> None:
    with pytest.raises(ValueError, match="before end"):
        SyncWindow(start=at(20), end=at(10)).resolve()


def test_negative_lookback_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        SyncWindow(lookback=timedelta(hours=-1)).resolve(clock=_now)


def test_since_previous_sync() -> None:
    assert SyncWindow.since(at(3), fallback=timedelta(days=30)) == SyncWindow(start=at(3))
    assert SyncWindow.since(None, fallback=timedelta(days=30)).resolve(clock=_now) == (
        _now() - timedelta(days=30),
        _now(),
    )
