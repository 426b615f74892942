"""Pydantic models describing the Google Calendar v3 payloads."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class GoogleCalendarModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EventDateTime(GoogleCalendarModel):
    date_time: datetime | None = Field(default=None, alias="dateTime")
    day: date | None = Field(default=None, alias="date")
    time_zone: str | None = Field(default=None, alias="timeZone")


class AttendeePayload(GoogleCalendarModel):
    email: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    is_self: bool = Field(default=False, alias="self")
    response_status: str | None = Field(default=None, alias="responseStatus")


class EventPayload(GoogleCalendarModel):
    id: str | None = None
    status: str | None = None
    summary: str | None = None
    description: str | None = None
    location: str | None = None
    start: EventDateTime | None = None
    end: EventDateTime | None = None
    attendees: list[AttendeePayload] = Field(default_factory=list[AttendeePayload])

    _normalize_text = field_validator("summary", "description", "location", mode="before")(
        _blank_to_none
    )


class EventsResponse(GoogleCalendarModel):
    items: list[EventPayload] = Field(default_factory=list[EventPayload])
    next_page_token: str | None = Field(default=None, alias="nextPageToken")


class ErrorDetail(GoogleCalendarModel):
    code: int
    message: str = ""


class ErrorResponse(GoogleCalendarModel):
    error: ErrorDetail
