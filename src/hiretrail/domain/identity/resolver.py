"""Resolve observed addresses and free text to a known company."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from hiretrail.domain.identity.normalize import (
    GENERIC_DOMAINS,
    MIN_NAME_KEY_LENGTH,
    company_matches,
    contains_name,
    domain_stem,
    email_domain,
    name_key,
    normalize_address,
    strip_legal_suffix,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from hiretrail.domain.model import Company, Contact

log = getLogger(__name__)


class MatchRule(StrEnum):
    DOMAIN = "domain"
    CONTACT_ADDRESS = "contact_address"
    TITLE = "title"
    DOMAIN_CONTAINS = "domain_contains"
    CREATED_FROM_DOMAIN = "created_from_domain"


@dataclass(frozen=True, slots=True)
class CompanyMatch:
    company_id: UUID
    name: str
    rule: MatchRule


class CompanyMatcher:
    """Match signals against one user's companies and contacts.

    Rules are tried in order and the first hit wins:

    1. exact domain of a contact (then of a company), generic and user domains excluded
    2. exact address of a known contact
    3. company name as a whole word in the free text
    4. company name contained in an observed non-generic domain
    """

    def __init__(
        self,
        companies: Iterable[Company],
        contacts: Iterable[Contact] = (),
        *,
        user_domains: Iterable[str] = (),
    ) -> None:
        self._excluded_domains = GENERIC_DOMAINS | {domain.lower() for domain in user_domains}
        self._companies: dict[UUID, Company] = {}
        self._company_domains: dict[str, UUID] = {}
        self._contact_domains: dict[str, UUID] = {}
        self._contact_addresses: dict[str, UUID] = {}
        self._by_name: list[Company] = []
        for company in companies:
            self.register_company(company)
        for contact in contacts:
            self.register_contact(contact)

    def register_company(self, company: Company) -> None:
        self._companies[company.id] = company
        domain = (company.email_domain or "").lower().removeprefix("www.")
        if domain and domain not in self._excluded_domains:
            self._company_domains.setdefault(domain, company.id)
        self._by_name.append(company)
        self._by_name.sort(key=lambda item: (-len(name_key(item.name)), item.name.lower()))

    def register_contact(self, contact: Contact) -> None:
        if contact.company_id is None or contact.company_id not in self._companies:
            return
        address = normalize_address(contact.email)
        if address is None:
            return
        self._contact_addresses.setdefault(address, contact.company_id)
        domain = email_domain(address)
        if domain and domain not in self._excluded_domains:
            self._contact_domains.setdefault(domain, contact.company_id)

    def get(self, company_id: UUID) -> Company | None:
        return self._companies.get(company_id)

    def is_excluded_domain(self, domain: str | None) -> bool:
        return domain is None or domain in self._excluded_domains

    def resolve(self, addresses: Iterable[str], text: str | None = None) -> CompanyMatch | None:
        observed = [address for address in map(normalize_address, addresses) if address]
        domains = [
            domain
            for domain in dict.fromkeys(email_domain(address) for address in observed)
            if domain and domain not in self._excluded_domains
        ]

        for domain in domains:
            company_id = self._contact_domains.get(domain) or self._company_domains.get(domain)
            if company_id is not None:
                return self._match(company_id, MatchRule.DOMAIN)

        for address in observed:
            company_id = self._contact_addresses.get(address)
            if company_id is not None:
                return self._match(company_id, MatchRule.CONTACT_ADDRESS)

        if text:
            for company in self._by_name:
                if contains_name(text, company.name):
                    return self._match(company.id, MatchRule.TITLE)

        for domain in domains:
            stem = domain_stem(domain)
            if len(name_key(stem)) < MIN_NAME_KEY_LENGTH:
                continue
            for company in self._by_name:
                name = strip_legal_suffix(company.name)
                if len(name_key(name)) >= MIN_NAME_KEY_LENGTH and company_matches(name, stem):
                    return self._match(company.id, MatchRule.DOMAIN_CONTAINS)

        return None

    def _match(self, company_id: UUID, rule: MatchRule) -> CompanyMatch:
        company = self._companies[company_id]
        log.debug("Resolved %s via %s", company.name, rule)
        return CompanyMatch(company_id=company.id, name=company.name, rule=rule)


def resolve_company(
    addresses: Iterable[str],
    text: str | None,
    *,
    companies: Iterable[Company],
    contacts: Iterable[Contact] = (),
    user_domains: Iterable[str] = (),
) -> CompanyMatch | None:
    """One-shot resolution; build a ``CompanyMatcher`` directly when resolving many signals."""

    matcher = CompanyMatcher(companies, contacts, user_domains=user_domains)
    return matcher.resolve(addresses, text)
