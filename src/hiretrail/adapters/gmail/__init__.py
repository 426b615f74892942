"""Public interface for the Gmail adapter."""

from __future__ import annotations

from .client import GmailAPIError, GmailFetcher, build_query
from .schema import GmailMessage, MessageListResponse
from .translator import decode_base64url, extract_body, parse_mail_message, strip_html

__all__ = [
    "GmailAPIError",
    "GmailFetcher",
    "GmailMessage",
    "MessageListResponse",
    "build_query",
    "decode_base64url",
    "extract_body",
    "parse_mail_message",
    "strip_html",
]
