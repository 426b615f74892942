"""Resolve the date range a sync run covers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def _ensure_aware(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        raise ValueError("Sync window bounds must include timezone information")
    return value.astimezone(UTC)


@dataclass(frozen=True)
class SyncWindow:
    """Temporal bounds for a calendar or mail sync.

    ``lookback`` counts back from ``end`` (or now). Combined with ``start``, the later of
    the two starts wins so a lookback never widens an explicit range.
    """

    start: datetime | None = None
    end: datetime | None = None
    lookback: timedelta | None = None

    def resolve(self, *, clock: Clock = utcnow) -> tuple[datetime | None, datetime | None]:
        resolved_end = _ensure_aware(self.end)
        resolved_start = _ensure_aware(self.start)

        if self.lookback is not None:
            if self.lookback < timedelta(0):
                raise ValueError("Lookback duration must be non-negative")
            anchor = resolved_end or clock().astimezone(UTC)
            from_lookback = anchor - self.lookback
            resolved_start = (
                from_lookback if resolved_start is None else max(resolved_start, from_lookback)
            )
            resolved_end = resolved_end or anchor

        if resolved_start and resolved_end and resolved_start > resolved_end:
            raise ValueError("Sync window start must be before end")

        return resolved_start, resolved_end

    @classmethod
    def since(cls, last_sync: datetime | None, *, fallback: timedelta) -> SyncWindow:
        """Window from the previous successful sync, or ``fallback`` back from now."""

        if last_sync is None:
            return cls(lookback=fallback)
        return cls(start=last_sync)


__all__ = ["Clock", "SyncWindow", "utcnow"]
