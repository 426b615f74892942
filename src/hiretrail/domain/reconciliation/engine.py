"""Apply status policies to stored job postings with compare-and-set writes."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from hiretrail.domain.errors import PersistenceError
from hiretrail.domain.reconciliation.policies import (
    StatusCandidate,
    fold_monotonic,
    replay_latest_evidence,
)
from hiretrail.domain.reconciliation.ranking import effective

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from hiretrail.domain.model import JobPosting, JobStatus
    from hiretrail.domain.ports.unit_of_work import SyncUnitOfWork
    from hiretrail.domain.reconciliation.policies import StatusPolicy

log = getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True, slots=True)
class ReconcileOutcome:
    company_id: UUID
    job_posting_id: UUID
    previous: JobStatus | None
    final: JobStatus
    written: bool


class StatusReconciler:
    """Reconcile candidate statuses into the posting a company's status lives on.

    The posting is the one referenced by the company's tracker entry, else the first
    posting for the company. Writes happen only when the final value differs from the
    stored one. A write lost to a concurrent writer re-reads and re-evaluates.
    """

    def __init__(
        self,
        uow: SyncUnitOfWork,
        *,
        user_id: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self.uow = uow
        self.user_id = user_id
        self.max_attempts = max_attempts

    def reconcile(
        self,
        company_id: UUID,
        candidates: Sequence[StatusCandidate],
        *,
        policy: StatusPolicy,
    ) -> ReconcileOutcome | None:
        posting = self._target_posting(company_id)
        if posting is None:
            log.debug("No job posting for company %s; status left untouched", company_id)
            return None

        postings = self.uow.repositories.job_postings
        for attempt in range(1, self.max_attempts + 1):
            stored = postings.current_status(posting.id)
            final = policy(stored, candidates)
            if final == effective(stored):
                return ReconcileOutcome(company_id, posting.id, stored, final, written=False)
            if postings.compare_and_set_status(posting.id, expected=stored, new=final):
                self.uow.commit()
                log.info("Status of posting %s: %s -> %s", posting.id, stored, final)
                return ReconcileOutcome(company_id, posting.id, stored, final, written=True)
            log.info(
                "Status of posting %s changed concurrently (attempt %s/%s)",
                posting.id,
                attempt,
                self.max_attempts,
            )
        raise PersistenceError(
            f"Status of job posting {posting.id} kept changing; gave up after "
            f"{self.max_attempts} attempts"
        )

    def reconcile_many(
        self,
        candidates: Iterable[StatusCandidate],
        *,
        policy: StatusPolicy,
    ) -> dict[UUID, ReconcileOutcome | PersistenceError | None]:
        """Reconcile each company independently; one failure does not stop the rest."""

        by_company: defaultdict[UUID, list[StatusCandidate]] = defaultdict(list)
        for candidate in candidates:
            by_company[candidate.company_id].append(candidate)

        outcomes: dict[UUID, ReconcileOutcome | PersistenceError | None] = {}
        for company_id, company_candidates in by_company.items():
            try:
                outcomes[company_id] = self.reconcile(
                    company_id, company_candidates, policy=policy
                )
            except PersistenceError as exc:
                self.uow.rollback()
                log.warning("Could not reconcile status for company %s: %s", company_id, exc)
                outcomes[company_id] = exc
        return outcomes

    def _target_posting(self, company_id: UUID) -> JobPosting | None:
        repositories = self.uow.repositories
        tracker = repositories.tracker_entries.get_for_company(self.user_id, company_id)
        if tracker is not None and tracker.job_posting_id is not None:
            posting = repositories.job_postings.get(tracker.job_posting_id)
            if posting is not None:
                return posting
        postings = repositories.job_postings.list_for_company(self.user_id, company_id)
        return postings[0] if postings else None


def reconcile_status(
    uow: SyncUnitOfWork,
    *,
    user_id: str,
    company_id: UUID,
    candidates: Sequence[StatusCandidate],
) -> JobStatus | None:
    """Batch replay ("latest evidence wins"); returns the final status or None without a posting."""

    outcome = StatusReconciler(uow, user_id=user_id).reconcile(
        company_id, candidates, policy=replay_latest_evidence
    )
    return outcome.final if outcome else None


def advance_status(
    uow: SyncUnitOfWork,
    *,
    user_id: str,
    candidate: StatusCandidate,
) -> JobStatus | None:
    """Incremental advance ("monotonic only") for a single signal."""

    outcome = StatusReconciler(uow, user_id=user_id).reconcile(
        candidate.company_id, (candidate,), policy=fold_monotonic
    )
    return outcome.final if outcome else None
