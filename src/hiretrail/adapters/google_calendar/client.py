"""HTTP client for the Google Calendar v3 API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from hiretrail.adapters.http_resilience import ResilientClient
from hiretrail.config.google import GOOGLE_CALENDAR_BASE_URL, GoogleConfig, get_google_config
from hiretrail.domain.errors import AuthExpiredError, PageTooLargeError
from hiretrail.domain.ports.fetching import CalendarFetcher, CalendarFetchResult

from .schema import ErrorResponse, EventsResponse
from .translator import parse_calendar_event

if TYPE_CHECKING:
    from collections.abc import Callable

    from hiretrail.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

PROVIDER_NAME = "Google Calendar"


def _to_rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate(response.json()).error.message or response.text
    except ValueError:
        return response.text


class GoogleCalendarAPIError(RuntimeError):
    """Raised when the Calendar API answers with an unexpected error."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass(slots=True)
class GoogleCalendarFetcher:
    """Fetch the primary calendar's events for a window in a single page."""

    config: GoogleConfig = field(default_factory=get_google_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(
        self,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 200,
    ) -> CalendarFetchResult:
        return asyncio.run(self._fetch_events_async(start=start, end=end, limit=limit))

    async def _fetch_events_async(
        self,
        *,
        start: datetime | None,
        end: datetime | None,
        limit: int,
    ) -> CalendarFetchResult:
        params: dict[str, str | int] = {
            "singleEvents": "true",
            "orderBy": "startTime",
            # one extra item reveals an oversized window
            "maxResults": limit + 1,
        }
        if start is not None:
            params["timeMin"] = _to_rfc3339(start)
        if end is not None:
            params["timeMax"] = _to_rfc3339(end)

        async with self.client_factory(self.config.calendar) as client:
            payload = await self._perform_request(client=client, params=httpx.QueryParams(params))

        if payload.next_page_token is not None or len(payload.items) > limit:
            raise PageTooLargeError(source="calendar", count=len(payload.items), limit=limit)

        events = [parse_calendar_event(item) for item in payload.items]
        log.info(f"Fetched {len(events)} calendar events")
        return CalendarFetchResult(events=events)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        params: httpx.QueryParams,
    ) -> EventsResponse:
        base_url = self.config.calendar.base_url or GOOGLE_CALENDAR_BASE_URL
        response = await client.get(f"{base_url}/calendars/primary/events", params=params)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthExpiredError(PROVIDER_NAME)
        if response.is_error:
            message = _error_message(response)
            log.error(f"Calendar API error {response.status_code}: {message}")
            raise GoogleCalendarAPIError(message, code=response.status_code)
        return EventsResponse.model_validate(response.json())


if TYPE_CHECKING:
    _fetcher_check: CalendarFetcher = GoogleCalendarFetcher()
