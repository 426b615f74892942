"""Status update policies.

Two policies exist and serve different call sites:

``replay_latest_evidence``
    Batch replay for a page of mail. Candidates are walked oldest to newest and
    each one replaces the effective status, so a later rejection overrides an
    earlier interview invite regardless of rank.

``advance_monotonic``
    Incremental advance for a single signal (and the fold used by calendar sync).
    A candidate only applies when it ranks strictly higher than the current status.

Neither policy ever leaves ``rejected`` or ``withdrew``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hiretrail.domain.reconciliation.ranking import effective, is_advance, is_terminal

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime
    from uuid import UUID

    from hiretrail.domain.model import JobStatus


@dataclass(frozen=True, slots=True)
class StatusCandidate:
    """Status implied by one signal about one company."""

    company_id: UUID
    status: JobStatus
    observed_at: datetime
    source_id: str


type StatusPolicy = Callable[[JobStatus | None, Iterable[StatusCandidate]], JobStatus]


def chronological(candidates: Iterable[StatusCandidate]) -> list[StatusCandidate]:
    return sorted(candidates, key=lambda candidate: (candidate.observed_at, candidate.source_id))


def replay_latest_evidence(
    persisted: JobStatus | None,
    candidates: Iterable[StatusCandidate],
) -> JobStatus:
    current = effective(persisted)
    for candidate in chronological(candidates):
        if is_terminal(current) or candidate.status == current:
            continue
        current = candidate.status
    return current


def advance_monotonic(current: JobStatus | None, candidate: JobStatus) -> JobStatus:
    if is_terminal(current) or not is_advance(current, candidate):
        return effective(current)
    return candidate


def fold_monotonic(
    persisted: JobStatus | None,
    candidates: Iterable[StatusCandidate],
) -> JobStatus:
    current = effective(persisted)
    for candidate in chronological(candidates):
        current = advance_monotonic(current, candidate.status)
    return current
