"""Calendar events and mail stored after resolution to a company."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hiretrail.domain.model.base import ExternalRecord
from hiretrail.domain.model.enums import EventType, MessageType

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class Participant:
    """Name and address of an attendee, sender, or recipient."""

    email: str
    name: str = ""

    @property
    def domain(self) -> str | None:
        if "@" not in self.email:
            return None
        return self.email.rsplit("@", 1)[1].lower()


@dataclass(eq=False, kw_only=True)
class CalendarEvent(ExternalRecord):
    company_id: UUID | None = None
    title: str
    description: str | None = None
    start_time: datetime
    end_time: datetime | None = None
    location: str | None = None
    attendees: tuple[Participant, ...] = field(default_factory=tuple["Participant", ...])
    status: str | None = None
    event_type: EventType = EventType.OTHER


@dataclass(eq=False, kw_only=True)
class Message(ExternalRecord):
    thread_id: UUID | None = None
    thread_external_id: str | None = None
    company_id: UUID | None = None
    subject: str = ""
    sender: Participant | None = None
    recipients: tuple[Participant, ...] = field(default_factory=tuple["Participant", ...])
    date: datetime
    body: str = ""
    labels: tuple[str, ...] = field(default_factory=tuple[str, ...])
    message_type: MessageType = MessageType.GENERAL


@dataclass(eq=False, kw_only=True)
class MessageThread(ExternalRecord):
    subject: str = ""
    participants: tuple[Participant, ...] = field(default_factory=tuple["Participant", ...])
    company_id: UUID | None = None
    latest_date: datetime | None = None
    message_type: MessageType = MessageType.GENERAL
    message_count: int = 0

    def absorb(self, message: Message, *, first_delivery: bool) -> None:
        """Fold a stored message into the thread summary."""

        if first_delivery:
            self.message_count += 1
        if self.company_id is None:
            self.company_id = message.company_id
        if not self.subject:
            self.subject = message.subject
        if self.latest_date is None or message.date >= self.latest_date:
            self.latest_date = message.date
            self.message_type = message.message_type
        known = {participant.email for participant in self.participants}
        observed = [message.sender, *message.recipients] if message.sender else message.recipients
        additions: list[Participant] = []
        for participant in observed:
            if participant.email in known:
                continue
            known.add(participant.email)
            additions.append(participant)
        if additions:
            self.participants = (*self.participants, *additions)
