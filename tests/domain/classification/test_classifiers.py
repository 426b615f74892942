from __future__ import annotations

import pytest

from hiretrail.domain.classification import classify_event, classify_message
from hiretrail.domain.model import EventType, MessageType


@pytest.mark.parametrize(
    ("title", "description", "expected"),
    [
        ("Acme Corp phone screen", None, EventType.PHONE_SCREEN),
        ("Onsite - Acme", None, EventType.ONSITE),
        ("Acme", "Final round with the team", EventType.ONSITE),
        ("Technical Interview with Globex", None, EventType.TECHNICAL_INTERVIEW),
        ("Interview: Acme", None, EventType.INTERVIEW),
        ("Coffee with Jane", None, EventType.CHAT),
        ("Webinar: careers at Acme", None, EventType.INFO_SESSION),
        ("Dentist", None, EventType.OTHER),
        (None, None, EventType.OTHER),
    ],
)
def test_classify_event(title: str | None, description: str | None, expected: EventType) -> None:
    assert classify_event(title, description) is expected


def test_phone_screen_wins_over_generic_interview() -> None:
    assert classify_event("Phone screen interview") is EventType.PHONE_SCREEN


@pytest.mark.parametrize(
    ("subject", "body", "sender", "expected"),
    [
        (
            "Your application to Acme",
            "Thank you for applying to Acme.",
            "jobs@acme.com",
            MessageType.CONFIRMATION,
        ),
        (
            "Update on your application",
            "Unfortunately we have decided to go another way.",
            None,
            MessageType.REJECTION,
        ),
        (
            "Offer from Acme",
            "We are pleased to share the details.",
            None,
            MessageType.OFFER,
        ),
        ("Interview with Acme", "Please pick a time.", None, MessageType.INTERVIEW_SCHEDULING),
        (
            "This week",
            "New job alert for you",
            "no-reply@jobs.example",
            MessageType.NEWSLETTER,
        ),
        (
            "Hot jobs",
            "Exciting job opportunities await. Unsubscribe here.",
            None,
            MessageType.SPAM,
        ),
        (
            "Hello",
            "I came across your profile and think you'd be a great fit.",
            None,
            MessageType.RECRUITER_OUTREACH,
        ),
        ("Following up", "Just checking in on last week.", None, MessageType.FOLLOW_UP),
        ("Lunch?", "Are you free on Friday?", None, MessageType.GENERAL),
        (None, None, None, MessageType.GENERAL),
    ],
)
def test_classify_message(
    subject: str | None,
    body: str | None,
    sender: str | None,
    expected: MessageType,
) -> None:
    assert classify_message(subject, body, sender) is expected


def test_rejection_subject_with_offer_body_is_an_offer() -> None:
    message_type = classify_message(
        "Update on your application",
        "We are thrilled to share an offer with you.",
    )

    assert message_type is MessageType.OFFER


def test_rejection_mentioning_offer_negatively_stays_rejection() -> None:
    message_type = classify_message(
        "Update on your application",
        "We are not able to make an offer at this time.",
    )

    assert message_type is MessageType.REJECTION


@pytest.mark.parametrize("text", ["", "   ", "ÆØÅ 🙂", "x" * 10_000, "<html></html>"])
def test_classifiers_are_total(text: str) -> None:
    assert isinstance(classify_event(text, text), EventType)
    assert isinstance(classify_message(text, text, text), MessageType)
