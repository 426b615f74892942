"""Total, side-effect-free classifiers over the rule tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hiretrail.domain.classification.rules import EVENT_RULES, MESSAGE_RULES, Field
from hiretrail.domain.model import EventType, MessageType

if TYPE_CHECKING:
    from collections.abc import Iterable
    from enum import StrEnum

    from hiretrail.domain.classification.rules import Fields, Rule


def first_match[TLabel: StrEnum](
    rules: Iterable[Rule[TLabel]],
    fields: Fields,
    default: TLabel,
) -> TLabel:
    for rule in rules:
        label = rule.evaluate(fields)
        if label is not None:
            return label
    return default


def classify_event(title: str | None, description: str | None = None) -> EventType:
    text = f"{title or ''} {description or ''}".lower()
    return first_match(EVENT_RULES, {Field.TEXT: text}, EventType.OTHER)


def classify_message(
    subject: str | None,
    body: str | None,
    from_address: str | None = None,
) -> MessageType:
    subject_lower = (subject or "").lower()
    body_lower = (body or "").lower()
    fields = {
        Field.SUBJECT: subject_lower,
        Field.BODY: body_lower,
        Field.SENDER: (from_address or "").lower(),
        Field.TEXT: f"{subject_lower} {body_lower}",
    }
    return first_match(MESSAGE_RULES, fields, MessageType.GENERAL)
