"""Synchronization defaults for calendar and mail ingestion."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, env_int

DEFAULT_PAGE_LIMIT = 200
DEFAULT_SELF_ADDRESS_MIN_SHARE = 0.5
DEFAULT_BODY_MATCH_CHARS = 500
DEFAULT_TEXT_MAX_CHARS = 5000


@dataclass(frozen=True, slots=True)
class SyncConfig:
    calendar_page_limit: int = DEFAULT_PAGE_LIMIT
    message_page_limit: int = DEFAULT_PAGE_LIMIT
    # share of fetched messages an address must receive to count as the user's own
    self_address_min_share: float = DEFAULT_SELF_ADDRESS_MIN_SHARE
    body_match_chars: int = DEFAULT_BODY_MATCH_CHARS
    text_max_chars: int = DEFAULT_TEXT_MAX_CHARS
    create_companies_from_domains: bool = False


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        calendar_page_limit=env_int("HIRETRAIL_CALENDAR_PAGE_LIMIT", DEFAULT_PAGE_LIMIT),
        message_page_limit=env_int("HIRETRAIL_MESSAGE_PAGE_LIMIT", DEFAULT_PAGE_LIMIT),
        create_companies_from_domains=env_flag("HIRETRAIL_CREATE_COMPANIES"),
    )
