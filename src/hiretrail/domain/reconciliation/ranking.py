"""Total order over job statuses, used only to block regressions."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from hiretrail.domain.model import JobStatus

if TYPE_CHECKING:
    from collections.abc import Mapping

STATUS_RANK: Final[Mapping[JobStatus, int]] = MappingProxyType(
    {
        JobStatus.INTERESTED: 0,
        JobStatus.APPLIED: 1,
        JobStatus.INTERVIEWING: 2,
        JobStatus.OFFER: 3,
        JobStatus.REJECTED: 4,
        JobStatus.WITHDREW: 5,
    }
)

TERMINAL_STATUSES: Final[frozenset[JobStatus]] = frozenset(
    {JobStatus.REJECTED, JobStatus.WITHDREW}
)


def effective(status: JobStatus | None) -> JobStatus:
    return status or JobStatus.INTERESTED


def rank(status: JobStatus | None) -> int:
    return STATUS_RANK[effective(status)]


def is_terminal(status: JobStatus | None) -> bool:
    return effective(status) in TERMINAL_STATUSES


def is_advance(current: JobStatus | None, candidate: JobStatus) -> bool:
    return rank(candidate) > rank(current)
