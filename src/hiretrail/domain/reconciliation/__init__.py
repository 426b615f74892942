"""Merge candidate statuses into the stored per-company application status."""

from __future__ import annotations

from .engine import ReconcileOutcome, StatusReconciler, advance_status, reconcile_status
from .policies import (
    StatusCandidate,
    StatusPolicy,
    advance_monotonic,
    chronological,
    fold_monotonic,
    replay_latest_evidence,
)
from .ranking import STATUS_RANK, TERMINAL_STATUSES, effective, is_advance, is_terminal, rank

__all__ = [
    "STATUS_RANK",
    "TERMINAL_STATUSES",
    "ReconcileOutcome",
    "StatusCandidate",
    "StatusPolicy",
    "StatusReconciler",
    "advance_monotonic",
    "advance_status",
    "chronological",
    "effective",
    "fold_monotonic",
    "is_advance",
    "is_terminal",
    "rank",
    "reconcile_status",
    "replay_latest_evidence",
]
