from __future__ import annotations

from itertools import permutations
from uuid import uuid4

import pytest

from hiretrail.domain.model import JobStatus
from hiretrail.domain.reconciliation import (
    StatusCandidate,
    advance_monotonic,
    fold_monotonic,
    is_advance,
    rank,
    replay_latest_evidence,
)
from tests.helpers.signals import at

COMPANY_ID = uuid4()


def candidate(status: JobStatus, day: int, source_id: str | None = None) -> StatusCandidate:
    return StatusCandidate(COMPANY_ID, status, at(day), source_id or f"signal-{day}")


def test_rank_treats_missing_status_as_interested() -> None:
    assert rank(None) == rank(JobStatus.INTERESTED) == 0
    assert rank(JobStatus.WITHDREW) == 5
    assert is_advance(None, JobStatus.APPLIED)
    assert not is_advance(JobStatus.OFFER, JobStatus.INTERVIEWING)


@pytest.mark.parametrize(
    "ordering",
    list(
        permutations(
            [
                candidate(JobStatus.APPLIED, 1),
                candidate(JobStatus.INTERVIEWING, 5),
                candidate(JobStatus.OFFER, 10),
            ]
        )
    ),
)
def test_replay_latest_evidence_ignores_input_order(
    ordering: tuple[StatusCandidate, ...],
) -> None:
    assert replay_latest_evidence(None, ordering) is JobStatus.OFFER


def test_replay_lets_later_evidence_move_status_down() -> None:
    candidates = [candidate(JobStatus.OFFER, 3), candidate(JobStatus.INTERVIEWING, 8)]

    assert replay_latest_evidence(JobStatus.APPLIED, candidates) is JobStatus.INTERVIEWING


def test_replay_stops_at_rejection() -> None:
    candidates = [
        candidate(JobStatus.INTERVIEWING, 2),
        candidate(JobStatus.REJECTED, 5),
        candidate(JobStatus.INTERVIEWING, 9),
    ]

    assert replay_latest_evidence(None, candidates) is JobStatus.REJECTED


def test_replay_without_candidates_keeps_stored_status() -> None:
    assert replay_latest_evidence(None, []) is JobStatus.INTERESTED
    assert replay_latest_evidence(JobStatus.OFFER, []) is JobStatus.OFFER


def test_monotonic_offer_then_applied_stays_offer() -> None:
    candidates = [candidate(JobStatus.OFFER, 1), candidate(JobStatus.APPLIED, 2)]

    assert fold_monotonic(None, candidates) is JobStatus.OFFER


def test_monotonic_takes_highest_rank() -> None:
    candidates = [candidate(JobStatus.INTERVIEWING, 10), candidate(JobStatus.APPLIED, 20)]

    assert fold_monotonic(JobStatus.INTERESTED, candidates) is JobStatus.INTERVIEWING


@pytest.mark.parametrize("terminal", [JobStatus.REJECTED, JobStatus.WITHDREW])
def test_terminal_statuses_are_never_left(terminal: JobStatus) -> None:
    later = [candidate(JobStatus.OFFER, 20), candidate(JobStatus.WITHDREW, 21)]

    assert replay_latest_evidence(terminal, later) is terminal
    assert fold_monotonic(terminal, later) is terminal
    assert advance_monotonic(terminal, JobStatus.OFFER) is terminal


def test_advance_monotonic_never_regresses() -> None:
    assert advance_monotonic(JobStatus.OFFER, JobStatus.APPLIED) is JobStatus.OFFER
    assert advance_monotonic(JobStatus.APPLIED, JobStatus.OFFER) is JobStatus.OFFER
    assert advance_monotonic(None, JobStatus.INTERESTED) is JobStatus.INTERESTED
