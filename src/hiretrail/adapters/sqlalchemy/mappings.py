"""SQLAlchemy mapping metadata for the hiretrail domain model."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)

from hiretrail.domain.model import (
    CalendarEvent,
    Company,
    Contact,
    EventType,
    JobPosting,
    JobStatus,
    Message,
    MessageThread,
    MessageType,
    Participant,
    TrackerEntry,
    UserSettings,
)

if TYPE_CHECKING:
    from enum import StrEnum

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _participant_from_json(item: object) -> Participant | None:
    if not isinstance(item, dict):
        return None
    data = cast(dict[str, Any], item)
    email = data.get("email")
    if not isinstance(email, str):
        return None
    name = data.get("name")
    return Participant(email=email, name=name if isinstance(name, str) else "")


class ParticipantType(TypeDecorator[Participant]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Participant | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps({"email": value.email, "name": value.name})

    def process_result_value(self, value: str | None, dialect: Dialect) -> Participant | None:
        _ = dialect
        if value is None:
            return None
        return _participant_from_json(json.loads(value))


class ParticipantListType(TypeDecorator[tuple[Participant, ...]]):
    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: tuple[Participant, ...] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps([{"email": item.email, "name": item.name} for item in value])

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[Participant, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        parsed = (_participant_from_json(item) for item in cast(list[object], loaded))
        return tuple(item for item in parsed if item is not None)


class StringTupleType(TypeDecorator[tuple[str, ...]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: tuple[str, ...] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[str, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        return tuple(item for item in cast(list[object], loaded) if isinstance(item, str))


def _enum_type(enum_cls: type[StrEnum]) -> Enum:
    # store values ("interviewing"), not member names
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

company_table = Table(
    "company",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", String, nullable=False, index=True),
    Column("name", String, nullable=False),
    Column("email_domain", String, nullable=True),
    Column("location", String, nullable=True),
)

contact_table = Table(
    "contact",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", String, nullable=False, index=True),
    Column(
        "company_id",
        UUIDColumnType,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("name", String, nullable=False),
    Column("email", String, nullable=True),
    Column("position", String, nullable=True),
    Column("location", String, nullable=True),
    Column("primary", Boolean, nullable=False, default=False),
)

job_posting_table = Table(
    "job_posting",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", String, nullable=False, index=True),
    Column(
        "company_id",
        UUIDColumnType,
        ForeignKey("company.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", String, nullable=False),
    Column("url", String, nullable=True),
    Column("status", _enum_type(JobStatus), nullable=True),
)

tracker_entry_table = Table(
    "tracker_entry",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", String, nullable=False, index=True),
    Column(
        "job_posting_id",
        UUIDColumnType,
        ForeignKey("job_posting.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "company_id",
        UUIDColumnType,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("role", String, nullable=True),
    Column("date_applied_raw", String, nullable=True),
    Column("notes", Text, nullable=True),
    Column("last_event_id", UUIDColumnType, nullable=True),
    Column("last_event_title", String, nullable=True),
    Column("last_event_date", UTCDateTime(), nullable=True),
)

calendar_event_table = Table(
    "calendar_event",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("user_id", String, nullable=False),
    Column("external_id", String, nullable=False),
    Column(
        "company_id",
        UUIDColumnType,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("title", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("start_time", UTCDateTime(), nullable=False),
    Column("end_time", UTCDateTime(), nullable=True),
    Column("location", String, nullable=True),
    Column("attendees", ParticipantListType(), nullable=False),
    Column("status", String, nullable=True),
    Column("event_type", _enum_type(EventType), nullable=False),
    UniqueConstraint("user_id", "external_id"),
)

message_thread_table = Table(
    "message_thread",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("user_id", String, nullable=False),
    Column("external_id", String, nullable=False),
    Column("subject", String, nullable=False, default=""),
    Column("participants", ParticipantListType(), nullable=False),
    Column(
        "company_id",
        UUIDColumnType,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("latest_date", UTCDateTime(), nullable=True),
    Column("message_type", _enum_type(MessageType), nullable=False),
    Column("message_count", Integer, nullable=False, default=0),
    UniqueConstraint("user_id", "external_id"),
)

message_table = Table(
    "message",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("user_id", String, nullable=False),
    Column("external_id", String, nullable=False),
    Column("thread_id", UUIDColumnType, nullable=True, index=True),
    Column("thread_external_id", String, nullable=True),
    Column(
        "company_id",
        UUIDColumnType,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("subject", String, nullable=False, default=""),
    Column("sender", ParticipantType(), nullable=True),
    Column("recipients", ParticipantListType(), nullable=False),
    Column("date", UTCDateTime(), nullable=False),
    Column("body", Text, nullable=False, default=""),
    Column("labels", StringTupleType(), nullable=False),
    Column("message_type", _enum_type(MessageType), nullable=False),
    UniqueConstraint("user_id", "external_id"),
)

user_settings_table = Table(
    "user_settings",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("user_id", String, nullable=False, unique=True),
    Column("calendar_last_sync_at", UTCDateTime(), nullable=True),
    Column("messages_last_sync_at", UTCDateTime(), nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Company, company_table)
    mapper_registry.map_imperatively(Contact, contact_table)
    mapper_registry.map_imperatively(JobPosting, job_posting_table)
    mapper_registry.map_imperatively(TrackerEntry, tracker_entry_table)
    mapper_registry.map_imperatively(CalendarEvent, calendar_event_table)
    mapper_registry.map_imperatively(MessageThread, message_thread_table)
    mapper_registry.map_imperatively(Message, message_table)
    mapper_registry.map_imperatively(UserSettings, user_settings_table)

    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
