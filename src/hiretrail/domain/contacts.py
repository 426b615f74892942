"""Lazy creation of companies and contacts discovered while syncing."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from hiretrail.domain.identity.normalize import company_matches, is_no_reply, normalize_address
from hiretrail.domain.model import Company, Contact

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from uuid import UUID

    from hiretrail.domain.model import Participant
    from hiretrail.domain.ports.unit_of_work import SyncUnitOfWork

log = getLogger(__name__)


def find_or_create_company(
    uow: SyncUnitOfWork,
    *,
    user_id: str,
    name: str,
    email_domain: str | None = None,
    location: str | None = None,
    known: Sequence[Company] | None = None,
) -> tuple[Company, bool]:
    """Return the company matching ``name`` (filling gaps) or stage a new one.

    The boolean is True when the company was created.
    """

    candidates = known if known is not None else uow.repositories.companies.list_for_user(user_id)
    for company in candidates:
        if company_matches(company.name, name):
            if email_domain and not company.email_domain:
                company.email_domain = email_domain
            if location and not company.location:
                company.location = location
            return company, False

    company = Company(
        user_id=user_id,
        name=name.strip(),
        email_domain=email_domain,
        location=location,
    )
    uow.repositories.companies.add(company)
    log.info("Created company %s", company.name)
    return company, True


class ContactDirectory:
    """Per-invocation view of a user's contacts, deduplicated by address.

    New contacts stay pending until ``accept`` (after a successful commit) or
    ``discard`` (after a rollback) so the in-memory view tracks the store.
    """

    def __init__(
        self,
        uow: SyncUnitOfWork,
        *,
        user_id: str,
        excluded_addresses: Collection[str] = (),
    ) -> None:
        self.uow = uow
        self.user_id = user_id
        self._excluded = {address.lower() for address in excluded_addresses}
        self._by_address: dict[str, Contact] = {}
        self._primary_companies: set[UUID] = set()
        self._pending: list[Contact] = []
        for contact in uow.repositories.contacts.list_for_user(user_id):
            self._index(contact)

    @property
    def contacts(self) -> list[Contact]:
        return list(self._by_address.values())

    def register(
        self,
        participant: Participant,
        *,
        company_id: UUID | None,
        position: str | None = None,
    ) -> Contact | None:
        """Stage a contact for an unknown address; returns it only when newly created."""

        address = normalize_address(participant.email)
        if address is None or address in self._excluded or is_no_reply(address):
            return None

        existing = self._by_address.get(address)
        if existing is not None:
            if position and not existing.position:
                existing.position = position
            if existing.company_id is None and company_id is not None:
                existing.company_id = company_id
            return None

        contact = Contact(
            user_id=self.user_id,
            company_id=company_id,
            name=participant.name.strip() or address.split("@", 1)[0],
            email=address,
            position=position,
            primary=company_id is not None and company_id not in self._primary_companies,
        )
        self.uow.repositories.contacts.add(contact)
        self._index(contact)
        self._pending.append(contact)
        return contact

    def accept(self) -> list[Contact]:
        accepted = self._pending
        self._pending = []
        return accepted

    def discard(self) -> None:
        for contact in self._pending:
            if contact.email:
                self._by_address.pop(contact.email, None)
            if contact.primary and contact.company_id is not None:
                self._primary_companies.discard(contact.company_id)
        self._pending = []

    def _index(self, contact: Contact) -> None:
        address = normalize_address(contact.email)
        if address is not None:
            self._by_address.setdefault(address, contact)
        if contact.primary and contact.company_id is not None:
            self._primary_companies.add(contact.company_id)
