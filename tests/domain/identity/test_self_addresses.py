from __future__ import annotations

from hiretrail.domain.identity import infer_self_addresses
from tests.helpers.signals import mail_record


def test_frequent_recipient_is_taken_as_self() -> None:
    messages = [
        mail_record("m1", subject="a", recipients=("me@example.com",)),
        mail_record("m2", subject="b", recipients=("Me@Example.com", "other@acme.com")),
        mail_record("m3", subject="c", recipients=("me@example.com", "me@example.com")),
        mail_record("m4", subject="d", recipients=("team@acme.com",)),
    ]

    assert infer_self_addresses(messages, 0.5) == frozenset({"me@example.com"})


def test_threshold_is_inclusive() -> None:
    messages = [
        mail_record("m1", subject="a", recipients=("me@example.com",)),
        mail_record("m2", subject="b", recipients=("alias@example.com",)),
    ]

    assert infer_self_addresses(messages, 0.5) == frozenset(
        {"me@example.com", "alias@example.com"}
    )


def test_empty_page_has_no_self_addresses() -> None:
    assert infer_self_addresses([], 0.5) == frozenset()
