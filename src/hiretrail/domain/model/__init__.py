"""Public domain model surface."""

from __future__ import annotations

from hiretrail.domain.model.base import Entity, ExternalRecord, new_id
from hiretrail.domain.model.companies import Company, Contact, JobPosting, TrackerEntry
from hiretrail.domain.model.enums import EventType, JobStatus, MessageType, RecordKind
from hiretrail.domain.model.settings import UserSettings
from hiretrail.domain.model.signals import CalendarEvent, Message, MessageThread, Participant

__all__ = [
    "CalendarEvent",
    "Company",
    "Contact",
    "Entity",
    "EventType",
    "ExternalRecord",
    "JobPosting",
    "JobStatus",
    "Message",
    "MessageThread",
    "MessageType",
    "Participant",
    "RecordKind",
    "TrackerEntry",
    "UserSettings",
    "new_id",
]
