from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hiretrail.domain.model.base import Entity

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class UserSettings(Entity):
    calendar_last_sync_at: datetime | None = None
    messages_last_sync_at: datetime | None = None
