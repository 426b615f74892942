"""Idempotent create-or-update of records mirrored from external providers."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, cast
from uuid import UUID, uuid5

from hiretrail.domain.errors import DuplicateRecordError
from hiretrail.domain.model import CalendarEvent, ExternalRecord, Message, MessageThread, RecordKind

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from hiretrail.domain.ports.persistence import ExternalRecordRepository
    from hiretrail.domain.ports.unit_of_work import SyncRepositories, SyncUnitOfWork

log = getLogger(__name__)

# Fixed seed; changing it would re-key every stored record.
RECORD_NAMESPACE: Final[UUID] = UUID("a1b2c3d4-e5f6-7890-abcd-ef1234567890")


class UpsertOutcome(StrEnum):
    CREATED = "created"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class UpsertResult[TRecord]:
    record: TRecord
    outcome: UpsertOutcome

    @property
    def created(self) -> bool:
        return self.outcome is UpsertOutcome.CREATED


@dataclass(frozen=True, slots=True)
class _RecordBinding:
    record_type: type[ExternalRecord]
    repository: Callable[[SyncRepositories], ExternalRecordRepository[ExternalRecord]]


_BINDINGS: Final[Mapping[RecordKind, _RecordBinding]] = MappingProxyType(
    {
        RecordKind.CALENDAR_EVENT: _RecordBinding(
            CalendarEvent,
            lambda repos: cast("ExternalRecordRepository[ExternalRecord]", repos.calendar_events),
        ),
        RecordKind.MESSAGE: _RecordBinding(
            Message,
            lambda repos: cast("ExternalRecordRepository[ExternalRecord]", repos.messages),
        ),
        RecordKind.MESSAGE_THREAD: _RecordBinding(
            MessageThread,
            lambda repos: cast("ExternalRecordRepository[ExternalRecord]", repos.threads),
        ),
    }
)

_IDENTITY_FIELDS: Final[frozenset[str]] = frozenset({"id", "user_id", "external_id"})


def internal_id_for(kind: RecordKind, user_id: str, external_id: str) -> UUID:
    """Stable internal id: the same external item always targets the same row."""

    return uuid5(RECORD_NAMESPACE, f"{kind.value}:{user_id}:{external_id}")


def merge_fields(record: object, values: Mapping[str, object]) -> bool:
    """Assign changed values onto ``record``; returns whether anything changed."""

    known = {item.name for item in fields(cast("ExternalRecord", record))}
    changed = False
    for name, value in values.items():
        if name in _IDENTITY_FIELDS:
            raise ValueError(f"Identity field {name!r} cannot be merged")
        if name not in known:
            raise ValueError(f"{type(record).__name__} has no field {name!r}")
        if getattr(record, name) != value:
            setattr(record, name, value)
            changed = True
    return changed


def upsert_record(
    uow: SyncUnitOfWork,
    kind: RecordKind,
    *,
    user_id: str,
    external_id: str,
    values: Mapping[str, object],
) -> UpsertResult[ExternalRecord]:
    """Update the record already stored for ``external_id`` or stage a new one.

    Nothing is committed here; see ``commit_with_retry``.
    """

    binding = _BINDINGS[kind]
    repository = binding.repository(uow.repositories)
    existing = repository.get_by_external_id(user_id, external_id)
    if existing is not None:
        merge_fields(existing, values)
        return UpsertResult(existing, UpsertOutcome.UPDATED)

    record = binding.record_type(
        id=internal_id_for(kind, user_id, external_id),
        user_id=user_id,
        external_id=external_id,
        **values,
    )
    repository.add(record)
    return UpsertResult(record, UpsertOutcome.CREATED)


def commit_with_retry[T](uow: SyncUnitOfWork, write: Callable[[], T]) -> T:
    """Run ``write`` and commit; a lost insert race is retried once as an update.

    ``write`` must look records up again on each call so the retry sees the row the
    concurrent writer committed.
    """

    result = write()
    try:
        uow.commit()
    except DuplicateRecordError:
        uow.rollback()
        log.info("Record was inserted concurrently; retrying as update")
        result = write()
        uow.commit()
    return result
