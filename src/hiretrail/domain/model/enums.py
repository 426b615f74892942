"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class JobStatus(StrEnum):
    INTERESTED = "interested"
    APPLIED = "applied"
    INTERVIEWING = "interviewing"
    OFFER = "offer"
    REJECTED = "rejected"
    WITHDREW = "withdrew"


class EventType(StrEnum):
    PHONE_SCREEN = "phone_screen"
    ONSITE = "onsite"
    TECHNICAL_INTERVIEW = "technical_interview"
    INTERVIEW = "interview"
    CHAT = "chat"
    INFO_SESSION = "info_session"
    OTHER = "other"


class MessageType(StrEnum):
    CONFIRMATION = "confirmation"
    RECRUITER_OUTREACH = "recruiter_outreach"
    INTERVIEW_SCHEDULING = "interview_scheduling"
    REJECTION = "rejection"
    OFFER = "offer"
    NEGOTIATION = "negotiation"
    FOLLOW_UP = "follow_up"
    SPAM = "spam"
    NEWSLETTER = "newsletter"
    GENERAL = "general"


class RecordKind(StrEnum):
    """Namespace used when deriving deterministic internal ids."""

    CALENDAR_EVENT = "calendar_event"
    MESSAGE = "message"
    MESSAGE_THREAD = "message_thread"
    JOB_POSTING = "job_posting"
    TRACKER_ENTRY = "tracker_entry"
    USER_SETTINGS = "user_settings"
