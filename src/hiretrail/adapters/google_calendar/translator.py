"""Translate Google Calendar payloads into calendar event records."""

from __future__ import annotations

from datetime import UTC, datetime, time
from typing import TYPE_CHECKING

from hiretrail.domain.model import Participant
from hiretrail.domain.ports.fetching import CalendarEventRecord

if TYPE_CHECKING:
    from .schema import AttendeePayload, EventDateTime, EventPayload


def parse_event_time(value: EventDateTime | None) -> datetime | None:
    """Return an aware UTC timestamp; all-day dates start at midnight UTC."""

    if value is None:
        return None
    if value.date_time is not None:
        moment = value.date_time
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        return moment.astimezone(UTC)
    if value.day is not None:
        return datetime.combine(value.day, time.min, tzinfo=UTC)
    return None


def _participants(attendees: list[AttendeePayload]) -> tuple[Participant, ...]:
    participants: list[Participant] = []
    for attendee in attendees:
        # the calendar owner is listed with self=true
        if attendee.is_self or not attendee.email:
            continue
        participants.append(
            Participant(email=attendee.email.strip(), name=(attendee.display_name or "").strip())
        )
    return tuple(participants)


def parse_calendar_event(payload: EventPayload) -> CalendarEventRecord:
    return CalendarEventRecord(
        external_id=payload.id or "",
        title=payload.summary,
        start=parse_event_time(payload.start),
        end=parse_event_time(payload.end),
        description=payload.description,
        location=payload.location,
        attendees=_participants(payload.attendees),
        status=payload.status,
    )
