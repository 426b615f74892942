"""Infer which mailbox addresses belong to the syncing user."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from hiretrail.domain.identity.normalize import normalize_address

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hiretrail.domain.ports.fetching import MailMessageRecord


def infer_self_addresses(
    messages: Sequence[MailMessageRecord],
    min_share: float,
) -> frozenset[str]:
    """Return recipients present on at least ``min_share`` of ``messages``.

    A mailbox owner receives most of what is in their inbox, so the most frequent
    recipients of a page are taken to be the user's own addresses.
    """

    if not messages:
        return frozenset()
    counts: Counter[str] = Counter()
    for message in messages:
        addresses = {normalize_address(recipient.email) for recipient in message.recipients}
        counts.update(address for address in addresses if address)
    threshold = min_share * len(messages)
    return frozenset(address for address, count in counts.items() if count >= threshold)
