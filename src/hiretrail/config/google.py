"""Google Calendar and Gmail configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

GOOGLE_CALENDAR_BASE_URL = "https://www.googleapis.com/calendar/v3"
GMAIL_BASE_URL = "https://gmail.googleapis.com/gmail/v1"
GOOGLE_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class GoogleConfig:
    """Credentials and client settings for the Google API adapters."""

    access_token: str
    user_id: str
    user_email: str | None
    calendar: ResilienceConfig
    gmail: ResilienceConfig


def _bearer_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}", "Accept": "application/json"}


def get_google_config(
    *,
    calendar: ResilienceConfig | None = None,
    gmail: ResilienceConfig | None = None,
) -> GoogleConfig:
    values = require_env_vars(("GOOGLE_ACCESS_TOKEN", "HIRETRAIL_USER_ID"))
    token = values["GOOGLE_ACCESS_TOKEN"]
    headers = _bearer_headers(token)
    return GoogleConfig(
        access_token=token,
        user_id=values["HIRETRAIL_USER_ID"],
        user_email=optional_env_var("HIRETRAIL_USER_EMAIL"),
        calendar=calendar
        or ResilienceConfig(
            name="google-calendar",
            base_url=GOOGLE_CALENDAR_BASE_URL,
            timeout_seconds=GOOGLE_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers=headers,
        ),
        gmail=gmail
        or ResilienceConfig(
            name="gmail",
            base_url=GMAIL_BASE_URL,
            timeout_seconds=GOOGLE_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=25, per_seconds=1.0),
            default_headers=headers,
        ),
    )
