"""Identity building blocks shared by all persisted records."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain.

    Every record is owned by exactly one user; queries are always scoped by ``user_id``.
    """

    id: UUID = field(default_factory=new_id)
    user_id: str


@dataclass(eq=False, kw_only=True)
class ExternalRecord(Entity):
    """Record mirrored from a provider item, keyed by the provider's id per user."""

    external_id: str
