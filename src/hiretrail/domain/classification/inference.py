"""Map classified signals and free-text labels to candidate job statuses."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from hiretrail.domain.classification.rules import (
    APPLIED_PHRASES,
    INTERVIEW_PHRASES,
    OFFER_PHRASES,
    REJECTION_PHRASES,
)
from hiretrail.domain.model import EventType, JobStatus, MessageType

if TYPE_CHECKING:
    from collections.abc import Mapping

STATUS_BY_SIGNAL: Final[Mapping[EventType | MessageType, JobStatus]] = MappingProxyType(
    {
        MessageType.REJECTION: JobStatus.REJECTED,
        MessageType.OFFER: JobStatus.OFFER,
        MessageType.INTERVIEW_SCHEDULING: JobStatus.INTERVIEWING,
        MessageType.CONFIRMATION: JobStatus.APPLIED,
        EventType.PHONE_SCREEN: JobStatus.INTERVIEWING,
        EventType.ONSITE: JobStatus.INTERVIEWING,
        EventType.TECHNICAL_INTERVIEW: JobStatus.INTERVIEWING,
        EventType.INTERVIEW: JobStatus.INTERVIEWING,
    }
)

_PHRASE_SCAN: Final[tuple[tuple[tuple[str, ...], JobStatus], ...]] = (
    (REJECTION_PHRASES, JobStatus.REJECTED),
    (OFFER_PHRASES, JobStatus.OFFER),
    (INTERVIEW_PHRASES, JobStatus.INTERVIEWING),
    (APPLIED_PHRASES, JobStatus.APPLIED),
)


def infer_status(signal: EventType | MessageType) -> JobStatus | None:
    """Return the status a classified signal implies, or None to leave status alone."""

    return STATUS_BY_SIGNAL.get(signal)


def infer_message_status(
    message_type: MessageType,
    subject: str | None,
    body: str | None,
) -> JobStatus | None:
    status = infer_status(message_type)
    if status is not None:
        return status
    text = f"{subject or ''} {body or ''}".lower()
    for phrases, candidate in _PHRASE_SCAN:
        if any(phrase in text for phrase in phrases):
            return candidate
    return None


_STATUS_VALUES: Final[frozenset[str]] = frozenset(status.value for status in JobStatus)

# Ordered: "haven't applied" must be read before "applied".
_LABEL_RULES: Final[tuple[tuple[tuple[str, ...], JobStatus | None], ...]] = (
    (("reject",), JobStatus.REJECTED),
    (("withdrew", "withdraw"), JobStatus.WITHDREW),
    (("offer",), JobStatus.OFFER),
    (("haven't applied", "havent applied", "not applied", "interested"), JobStatus.INTERESTED),
    (("screen", "onsite", "on-site", "interview", "scheduled"), JobStatus.INTERVIEWING),
    (("applied", "sent app"), JobStatus.APPLIED),
    (("waiting", "recruiter", "unknown"), None),
)


def normalize_status_label(label: str | None) -> JobStatus | None:
    """Read a hand-typed tracker status such as "Offer received!!" or "Sent app"."""

    if not label:
        return None
    lowered = label.strip().lower()
    if lowered in _STATUS_VALUES:
        return JobStatus(lowered)
    for needles, status in _LABEL_RULES:
        if any(needle in lowered for needle in needles):
            return status
    return None
