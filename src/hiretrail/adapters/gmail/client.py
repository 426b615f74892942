"""HTTP client for the Gmail v1 API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from hiretrail.adapters.http_resilience import ResilientClient
from hiretrail.config.google import GMAIL_BASE_URL, GoogleConfig, get_google_config
from hiretrail.domain.errors import AuthExpiredError, PageTooLargeError
from hiretrail.domain.ports.fetching import MailFetcher, MailFetchResult, MailMessageRecord

from .schema import ErrorResponse, GmailMessage, MessageListResponse
from .translator import parse_mail_message

if TYPE_CHECKING:
    from collections.abc import Callable

    from hiretrail.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

PROVIDER_NAME = "Gmail"
EXCLUDED_CATEGORIES = ("promotions", "social", "forums")
DEFAULT_BATCH_SIZE = 20


def _epoch_seconds(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.astimezone(UTC).timestamp())


def build_query(start: datetime | None, end: datetime | None) -> str:
    terms: list[str] = []
    if start is not None:
        terms.append(f"after:{_epoch_seconds(start)}")
    if end is not None:
        terms.append(f"before:{_epoch_seconds(end)}")
    terms.extend(f"-category:{category}" for category in EXCLUDED_CATEGORIES)
    return " ".join(terms)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate(response.json()).error.message or response.text
    except ValueError:
        return response.text


class GmailAPIError(RuntimeError):
    """Raised when the Gmail API answers with an unexpected error."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass(slots=True)
class GmailFetcher:
    """List message ids for a window, then fetch full messages in concurrent batches."""

    config: GoogleConfig = field(default_factory=get_google_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    batch_size: int = DEFAULT_BATCH_SIZE

    def __call__(
        self,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 200,
    ) -> MailFetchResult:
        return asyncio.run(self._fetch_messages_async(start=start, end=end, limit=limit))

    async def _fetch_messages_async(
        self,
        *,
        start: datetime | None,
        end: datetime | None,
        limit: int,
    ) -> MailFetchResult:
        params = httpx.QueryParams({"q": build_query(start, end), "maxResults": limit + 1})

        messages: list[MailMessageRecord] = []
        failed_ids: list[str] = []
        async with self.client_factory(self.config.gmail) as client:
            listing = MessageListResponse.model_validate(
                await self._get_json(client, "users/me/messages", params=params)
            )
            if listing.next_page_token is not None or len(listing.messages) > limit:
                count = max(listing.result_size_estimate or 0, len(listing.messages))
                raise PageTooLargeError(source="mail", count=count, limit=limit)

            ids = [ref.id for ref in listing.messages]
            for offset in range(0, len(ids), self.batch_size):
                batch = ids[offset : offset + self.batch_size]
                results = await asyncio.gather(
                    *(self._fetch_message(client, message_id) for message_id in batch),
                    return_exceptions=True,
                )
                for message_id, result in zip(batch, results, strict=True):
                    if isinstance(result, AuthExpiredError):
                        raise result
                    if isinstance(result, Exception):
                        log.warning(f"Could not fetch message {message_id}: {result}")
                        failed_ids.append(message_id)
                        continue
                    if isinstance(result, BaseException):
                        raise result
                    messages.append(parse_mail_message(result))

        log.info(f"Fetched {len(messages)} messages ({len(failed_ids)} failed)")
        return MailFetchResult(messages=messages, failed_ids=failed_ids)

    async def _fetch_message(self, client: ResilientClient, message_id: str) -> GmailMessage:
        payload = await self._get_json(
            client,
            f"users/me/messages/{message_id}",
            params=httpx.QueryParams({"format": "full"}),
        )
        return GmailMessage.model_validate(payload)

    async def _get_json(
        self,
        client: ResilientClient,
        path: str,
        *,
        params: httpx.QueryParams,
    ) -> object:
        base_url = self.config.gmail.base_url or GMAIL_BASE_URL
        response = await client.get(f"{base_url}/{path}", params=params)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthExpiredError(PROVIDER_NAME)
        if response.is_error:
            message = _error_message(response)
            log.error(f"Gmail API error {response.status_code}: {message}")
            raise GmailAPIError(message, code=response.status_code)
        return response.json()


if TYPE_CHECKING:
    _fetcher_check: MailFetcher = GmailFetcher()
