"""Public interface for the Google Calendar adapter."""

from __future__ import annotations

from .client import GoogleCalendarAPIError, GoogleCalendarFetcher
from .schema import EventPayload, EventsResponse
from .translator import parse_calendar_event, parse_event_time

__all__ = [
    "EventPayload",
    "EventsResponse",
    "GoogleCalendarAPIError",
    "GoogleCalendarFetcher",
    "parse_calendar_event",
    "parse_event_time",
]
