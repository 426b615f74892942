"""Translate Gmail payloads into mail message records."""

from __future__ import annotations

import base64
import binascii
import html
import re
from datetime import UTC, datetime
from email.utils import getaddresses, parsedate_to_datetime
from logging import getLogger
from typing import TYPE_CHECKING

from hiretrail.domain.model import Participant
from hiretrail.domain.ports.fetching import MailMessageRecord

if TYPE_CHECKING:
    from .schema import GmailMessage, MessagePart

log = getLogger(__name__)

_STYLE_RE = re.compile(r"<(style|script)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def decode_base64url(data: str) -> str:
    padded = data + "=" * (-len(data) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError):
        log.debug("Undecodable message body part")
        return ""
    return raw.decode("utf-8", errors="replace")


def strip_html(markup: str) -> str:
    text = _STYLE_RE.sub("", markup)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    return _SPACE_RE.sub(" ", text).strip()


def _find_part(parts: list[MessagePart], mime_type: str) -> str | None:
    for part in parts:
        if part.mime_type == mime_type and part.body is not None and part.body.data:
            return decode_base64url(part.body.data)
        nested = _find_part(part.parts, mime_type)
        if nested:
            return nested
    return None


def extract_body(message: GmailMessage) -> str:
    """Plain-text body; HTML parts are stripped and the snippet is the last resort."""

    payload = message.payload
    if payload is None:
        return message.snippet
    if payload.body is not None and payload.body.data:
        decoded = decode_base64url(payload.body.data)
        return strip_html(decoded) if payload.mime_type == "text/html" else decoded
    plain = _find_part(payload.parts, "text/plain")
    if plain:
        return plain
    markup = _find_part(payload.parts, "text/html")
    if markup:
        return strip_html(markup)
    return message.snippet


def parse_addresses(value: str) -> tuple[Participant, ...]:
    participants: list[Participant] = []
    for name, address in getaddresses([value]):
        address = address.strip()
        if "@" not in address:
            continue
        participants.append(Participant(email=address, name=name.strip()))
    return tuple(participants)


def parse_message_date(message: GmailMessage) -> datetime | None:
    if message.internal_date is not None:
        return datetime.fromtimestamp(message.internal_date / 1000, tz=UTC)
    raw = message.header("Date")
    if not raw:
        return None
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_mail_message(message: GmailMessage) -> MailMessageRecord:
    senders = parse_addresses(message.header("From"))
    recipients = parse_addresses(message.header("To")) + parse_addresses(message.header("Cc"))
    return MailMessageRecord(
        external_id=message.id,
        thread_external_id=message.thread_id,
        subject=message.header("Subject").strip(),
        body=extract_body(message),
        sender=senders[0] if senders else None,
        recipients=recipients,
        date=parse_message_date(message),
        labels=tuple(message.label_ids),
    )
