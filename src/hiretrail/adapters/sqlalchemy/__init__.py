"""SQLAlchemy adapter package for hiretrail."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyCalendarEventRepository,
    SqlAlchemyCompanyRepository,
    SqlAlchemyContactRepository,
    SqlAlchemyJobPostingRepository,
    SqlAlchemyMessageRepository,
    SqlAlchemyMessageThreadRepository,
    SqlAlchemyTrackerEntryRepository,
    SqlAlchemyUserSettingsRepository,
)
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyCalendarEventRepository",
    "SqlAlchemyCompanyRepository",
    "SqlAlchemyContactRepository",
    "SqlAlchemyJobPostingRepository",
    "SqlAlchemyMessageRepository",
    "SqlAlchemyMessageThreadRepository",
    "SqlAlchemyTrackerEntryRepository",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUserSettingsRepository",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "startup",
    "start_mappers",
]
