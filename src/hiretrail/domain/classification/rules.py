"""Ordered keyword rule tables for event and message classification.

Each table is an immutable tuple evaluated top to bottom; the first rule with a
matching clause decides the label. A clause matches when every required term
matches and no excluded term does; a term matches when any of its phrases is a
substring of the lower-cased field.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from hiretrail.domain.model import EventType, MessageType

if TYPE_CHECKING:
    from collections.abc import Mapping


class Field(StrEnum):
    SUBJECT = "subject"
    BODY = "body"
    SENDER = "sender"
    # subject and body together, or title and description for events
    TEXT = "text"


type Fields = Mapping[Field, str]


@dataclass(frozen=True, slots=True)
class Term:
    field: Field
    phrases: tuple[str, ...]

    def matches(self, fields: Fields) -> bool:
        value = fields.get(self.field, "")
        return any(phrase in value for phrase in self.phrases)


@dataclass(frozen=True, slots=True)
class Clause:
    required: tuple[Term, ...]
    excluded: tuple[Term, ...] = ()

    def matches(self, fields: Fields) -> bool:
        return all(term.matches(fields) for term in self.required) and not any(
            term.matches(fields) for term in self.excluded
        )


@dataclass(frozen=True)
class Rule[TLabel: StrEnum]:
    label: TLabel
    clauses: tuple[Clause, ...]
    # (label, clause) checked after this rule fires; a match relabels the result
    override: tuple[TLabel, Clause] | None = None

    def evaluate(self, fields: Fields) -> TLabel | None:
        if not any(clause.matches(fields) for clause in self.clauses):
            return None
        if self.override is not None:
            override_label, override_clause = self.override
            if override_clause.matches(fields):
                return override_label
        return self.label


def any_of(field: Field, *phrases: str) -> Term:
    return Term(field=field, phrases=phrases)


def when(*required: Term, unless: tuple[Term, ...] = ()) -> Clause:
    return Clause(required=required, excluded=unless)


EVENT_RULES: tuple[Rule[EventType], ...] = (
    Rule(EventType.PHONE_SCREEN, (when(any_of(Field.TEXT, "phone screen", "phonescreen")),)),
    Rule(EventType.ONSITE, (when(any_of(Field.TEXT, "onsite", "on-site", "final round")),)),
    Rule(
        EventType.TECHNICAL_INTERVIEW,
        (when(any_of(Field.TEXT, "technical"), any_of(Field.TEXT, "interview")),),
    ),
    Rule(EventType.INTERVIEW, (when(any_of(Field.TEXT, "interview", "hiring")),)),
    Rule(EventType.CHAT, (when(any_of(Field.TEXT, "coffee", "lunch", "meet")),)),
    Rule(EventType.INFO_SESSION, (when(any_of(Field.TEXT, "info session", "webinar")),)),
)

_UNSUBSCRIBE = any_of(Field.BODY, "unsubscribe")

MESSAGE_RULES: tuple[Rule[MessageType], ...] = (
    Rule(
        MessageType.NEWSLETTER,
        (
            when(
                any_of(Field.SENDER, "no-reply"),
                any_of(Field.BODY, "unsubscribe", "job alert"),
            ),
        ),
    ),
    Rule(
        MessageType.SPAM,
        (
            when(
                _UNSUBSCRIBE,
                any_of(Field.BODY, "job opportunities"),
                unless=(any_of(Field.BODY, "interview"),),
            ),
        ),
    ),
    Rule(
        MessageType.NEWSLETTER,
        (when(any_of(Field.TEXT, "unsubscribe"), any_of(Field.TEXT, "newsletter")),),
    ),
    Rule(
        MessageType.REJECTION,
        (
            when(any_of(Field.SUBJECT, "update on your")),
            when(
                any_of(
                    Field.BODY,
                    "decided not to move forward",
                    "not moving forward",
                    "other candidates",
                    "won't be moving forward",
                    "won't be advancing",
                    "unfortunately",
                )
            ),
        ),
        override=(
            MessageType.OFFER,
            when(any_of(Field.BODY, "offer"), unless=(any_of(Field.BODY, "not"),)),
        ),
    ),
    Rule(
        MessageType.OFFER,
        (
            when(any_of(Field.SUBJECT, "offer")),
            when(any_of(Field.BODY, "pleased to extend", "offer letter", "compensation package")),
            when(
                any_of(Field.TEXT, "offer"),
                any_of(Field.TEXT, "extend", "compensation", "package"),
            ),
        ),
    ),
    Rule(
        MessageType.NEGOTIATION,
        (
            when(
                any_of(
                    Field.BODY,
                    "counter",
                    "negotiate",
                    "revised offer",
                    "additional equity",
                    "signing bonus",
                )
            ),
            when(any_of(Field.TEXT, "salary")),
        ),
    ),
    Rule(
        MessageType.INTERVIEW_SCHEDULING,
        (
            when(any_of(Field.SUBJECT, "interview", "onsite", "phone screen")),
            when(any_of(Field.BODY, "technical phone screen")),
            when(
                any_of(Field.TEXT, "schedule"),
                any_of(Field.TEXT, "interview", "call", "meeting"),
            ),
        ),
    ),
    Rule(
        MessageType.CONFIRMATION,
        (
            when(any_of(Field.SUBJECT, "application received", "application confirmed")),
            when(any_of(Field.BODY, "thank you for applying", "received your application")),
            when(
                any_of(Field.TEXT, "application"),
                any_of(Field.TEXT, "received", "confirmed", "thank"),
            ),
        ),
    ),
    Rule(
        MessageType.RECRUITER_OUTREACH,
        (
            when(
                any_of(
                    Field.BODY,
                    "came across your profile",
                    "impressed by your",
                    "reaching out",
                    "love to connect",
                    "opportunity that might",
                )
            ),
            when(any_of(Field.TEXT, "recruiter", "opportunity", "role", "position")),
        ),
    ),
    Rule(
        MessageType.FOLLOW_UP,
        (
            when(any_of(Field.SUBJECT, "follow")),
            when(any_of(Field.BODY, "checking in", "following up", "just wanted to")),
        ),
    ),
)

# Deeper phrase scan for messages whose type carries no status of its own.
REJECTION_PHRASES: tuple[str, ...] = (
    "move forward with another candidate",
    "not considering",
    "unfortunately we won't be advancing",
    "decided not to proceed",
    "position has been filled",
    "not a fit",
    "won't be moving forward",
    "after careful consideration",
    "we regret to inform",
    "not selected",
    "will not be proceeding",
    "not moving forward",
    "other candidates",
    "decided not to move forward",
    "won't be advancing",
    "unfortunately",
)

OFFER_PHRASES: tuple[str, ...] = (
    "pleased to extend",
    "offer letter",
    "compensation package",
    "extend an offer",
    "we'd like to offer",
    "formal offer",
    "offer of employment",
)

INTERVIEW_PHRASES: tuple[str, ...] = (
    "schedule an interview",
    "schedule a call",
    "phone screen",
    "technical interview",
    "on-site interview",
    "interview invitation",
    "interview request",
    "zoom link",
    "meet the team",
    "panel interview",
    "final round",
    "next steps in the interview",
)

APPLIED_PHRASES: tuple[str, ...] = (
    "received your application",
    "application received",
    "application confirmed",
    "thank you for applying",
    "we received your",
)
