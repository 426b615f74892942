"""Companies, their people, and the application records attached to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hiretrail.domain.model.base import Entity
from hiretrail.domain.model.enums import JobStatus

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Company(Entity):
    name: str
    email_domain: str | None = None
    location: str | None = None


@dataclass(eq=False, kw_only=True)
class Contact(Entity):
    """Person met during the search; at most one primary contact per company."""

    company_id: UUID | None = None
    name: str
    email: str | None = None
    position: str | None = None
    location: str | None = None
    primary: bool = False


@dataclass(eq=False, kw_only=True)
class JobPosting(Entity):
    company_id: UUID
    title: str
    url: str | None = None
    # authoritative application status; None is read as interested
    status: JobStatus | None = None

    @property
    def effective_status(self) -> JobStatus:
        return self.status or JobStatus.INTERESTED


@dataclass(eq=False, kw_only=True)
class TrackerEntry(Entity):
    """Denormalised tracking row; never the source of truth for status."""

    job_posting_id: UUID | None = None
    company_id: UUID | None = None
    role: str | None = None
    date_applied_raw: str | None = None
    notes: str | None = None
    last_event_id: UUID | None = None
    last_event_title: str | None = None
    last_event_date: datetime | None = None

    def record_event(self, *, event_id: UUID, title: str, occurred_at: datetime) -> bool:
        """Point at a newer event; returns False when the recorded one is as recent."""

        if self.last_event_date is not None and occurred_at <= self.last_event_date:
            return False
        self.last_event_id = event_id
        self.last_event_title = title
        self.last_event_date = occurred_at
        return True
