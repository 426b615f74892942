"""Name and address normalisation used when matching signals to companies."""

from __future__ import annotations

import re
from typing import Final

GENERIC_DOMAINS: Final[frozenset[str]] = frozenset(
    {
        "gmail.com",
        "yahoo.com",
        "hotmail.com",
        "outlook.com",
        "aol.com",
        "icloud.com",
        "mail.com",
        "protonmail.com",
        "live.com",
        "msn.com",
        "me.com",
        "mac.com",
        "googlemail.com",
        "ymail.com",
    }
)

NO_REPLY_MARKERS: Final[tuple[str, ...]] = ("no-reply", "noreply", "donotreply", "do-not-reply")

# names shorter than this only match through an exact domain or address
MIN_NAME_KEY_LENGTH: Final[int] = 3

_NON_ALNUM = re.compile(r"[^0-9a-z]+")
_TOKEN = re.compile(r"[0-9a-z]+")
_LEGAL_SUFFIXES: Final[frozenset[str]] = frozenset(
    {"inc", "llc", "ltd", "corp", "co", "gmbh", "plc", "corporation", "limited"}
)
_TLD_SUFFIX = re.compile(r"\.(com|io|org|co|dev|tech|ai|net)(\.[a-z]{2})?$")
_ROLE_PREFIX = re.compile(r"^(no-?reply|careers|jobs|recruiting|talent|hr|mail|email|www)\.")


def name_key(name: str | None) -> str:
    """Lower-case ``name`` and drop spaces, hyphens, underscores and punctuation."""

    if not name:
        return ""
    return _NON_ALNUM.sub("", name.lower())


def strip_legal_suffix(name: str) -> str:
    tokens = name.split()
    while len(tokens) > 1 and name_key(tokens[-1]) in _LEGAL_SUFFIXES:
        tokens.pop()
    return " ".join(tokens).rstrip(",")


def company_matches(left: str | None, right: str | None) -> bool:
    """Two names match when either normalised key contains the other."""

    left_key = name_key(left)
    right_key = name_key(right)
    if not left_key or not right_key:
        return False
    return left_key in right_key or right_key in left_key


def contains_name(text: str | None, name: str) -> bool:
    """Return whether ``name`` occurs in ``text`` on whole-word boundaries.

    Words are compared by concatenating consecutive tokens, so "Data Dog" and
    "datadog" find each other while "Meta" does not match inside "metadata".
    """

    if not text:
        return False
    target = name_key(strip_legal_suffix(name))
    if len(target) < MIN_NAME_KEY_LENGTH:
        return False
    tokens = _TOKEN.findall(text.lower())
    for start in range(len(tokens)):
        joined = ""
        for token in tokens[start:]:
            joined += token
            if joined == target:
                return True
            if len(joined) >= len(target) or not target.startswith(joined):
                break
    return False


def normalize_address(address: str | None) -> str | None:
    if not address:
        return None
    cleaned = address.strip().strip("<>").lower()
    if "@" not in cleaned:
        return None
    return cleaned


def email_domain(address: str | None) -> str | None:
    normalized = normalize_address(address)
    if normalized is None:
        return None
    domain = normalized.rsplit("@", 1)[1]
    return domain.removeprefix("www.") or None


def domain_stem(domain: str) -> str:
    """Drop the top-level domain: ``careers.acme.co.uk`` becomes ``careers.acme``."""

    lowered = domain.lower().strip(".")
    stem = _TLD_SUFFIX.sub("", lowered)
    if stem == lowered:
        stem = lowered.rsplit(".", 1)[0]
    return stem


def is_generic_domain(domain: str | None) -> bool:
    return domain is None or domain.lower() in GENERIC_DOMAINS


def is_no_reply(address: str | None) -> bool:
    normalized = normalize_address(address)
    if normalized is None:
        return False
    return any(marker in normalized for marker in NO_REPLY_MARKERS)


def company_name_from_domain(domain: str | None) -> str | None:
    """Derive a display name such as "Acme" from ``careers.acme.io``.

    Generic consumer-mail domains never name a company.
    """

    if not domain:
        return None
    lowered = domain.lower().strip(".")
    if is_generic_domain(lowered):
        return None
    stem = _TLD_SUFFIX.sub("", lowered)
    while True:
        stripped = _ROLE_PREFIX.sub("", stem)
        if stripped == stem:
            break
        stem = stripped
    label = stem.rsplit(".", 1)[-1]
    if len(name_key(label)) < MIN_NAME_KEY_LENGTH:
        return None
    return label[:1].upper() + label[1:]
