"""Mock-transport plumbing for the Google adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from hiretrail.adapters.http_resilience import ResilientClient
from hiretrail.config import GoogleConfig, ResilienceConfig
from hiretrail.config.google import GMAIL_BASE_URL, GOOGLE_CALENDAR_BASE_URL
from tests.helpers.signals import USER_EMAIL, USER_ID

if TYPE_CHECKING:
    from collections.abc import Callable


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def google_config() -> GoogleConfig:
    return GoogleConfig(
        access_token="test-token",  # noqa: S106
        user_id=USER_ID,
        user_email=USER_EMAIL,
        calendar=ResilienceConfig(name="google-calendar", base_url=GOOGLE_CALENDAR_BASE_URL),
        gmail=ResilienceConfig(name="gmail", base_url=GMAIL_BASE_URL),
    )


def error_body(code: int, message: str) -> dict[str, object]:
    return {"error": {"code": code, "message": message}}
