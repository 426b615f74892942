from __future__ import annotations

import pytest

from hiretrail.domain.classification import (
    infer_message_status,
    infer_status,
    normalize_status_label,
)
from hiretrail.domain.model import EventType, JobStatus, MessageType


@pytest.mark.parametrize(
    ("signal", "expected"),
    [
        (EventType.PHONE_SCREEN, JobStatus.INTERVIEWING),
        (EventType.ONSITE, JobStatus.INTERVIEWING),
        (EventType.CHAT, None),
        (EventType.OTHER, None),
        (MessageType.CONFIRMATION, JobStatus.APPLIED),
        (MessageType.REJECTION, JobStatus.REJECTED),
        (MessageType.OFFER, JobStatus.OFFER),
        (MessageType.RECRUITER_OUTREACH, None),
    ],
)
def test_infer_status(signal: EventType | MessageType, expected: JobStatus | None) -> None:
    assert infer_status(signal) == expected


def test_phrase_scan_for_untyped_messages() -> None:
    assert (
        infer_message_status(MessageType.GENERAL, "Quick note", "We regret to inform you.")
        is JobStatus.REJECTED
    )
    assert (
        infer_message_status(MessageType.FOLLOW_UP, "Next steps", "Here is the zoom link.")
        is JobStatus.INTERVIEWING
    )
    assert infer_message_status(MessageType.GENERAL, "Lunch?", "See you then") is None


def test_typed_message_status_skips_phrase_scan() -> None:
    assert (
        infer_message_status(MessageType.OFFER, "Offer", "unfortunately the parking is full")
        is JobStatus.OFFER
    )


def test_phrase_scan_covers_every_type_without_a_status() -> None:
    assert (
        infer_message_status(MessageType.NEWSLETTER, "Digest", "Book your phone screen")
        is JobStatus.INTERVIEWING
    )
    assert (
        infer_message_status(MessageType.SPAM, "Update", "We regret to inform you.")
        is JobStatus.REJECTED
    )
    assert infer_message_status(MessageType.SPAM, "Jobs", "Unfortunately...") is None


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Offer received!!", JobStatus.OFFER),
        ("phone screen scheduled", JobStatus.INTERVIEWING),
        ("Sent app", JobStatus.APPLIED),
        ("applied", JobStatus.APPLIED),
        ("haven't applied", JobStatus.INTERESTED),
        ("Rejected", JobStatus.REJECTED),
        ("Withdrew", JobStatus.WITHDREW),
        ("waiting", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_status_label(label: str | None, expected: JobStatus | None) -> None:
    assert normalize_status_label(label) == expected
