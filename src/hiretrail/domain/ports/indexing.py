"""Port for the auxiliary search index fed after primary writes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hiretrail.domain.model import Contact, Message


@runtime_checkable
class SignalIndex(Protocol):
    """Best-effort sink; callers log failures and never propagate them."""

    def index_message(self, message: Message, *, company_name: str) -> None: ...

    def index_contact(self, contact: Contact, *, company_name: str | None) -> None: ...


class NullSignalIndex:
    def index_message(self, message: Message, *, company_name: str) -> None:
        _ = (message, company_name)

    def index_contact(self, contact: Contact, *, company_name: str | None) -> None:
        _ = (contact, company_name)


if TYPE_CHECKING:
    _index_check: SignalIndex = NullSignalIndex()
