"""Company identity resolution."""

from __future__ import annotations

from .normalize import (
    GENERIC_DOMAINS,
    company_matches,
    company_name_from_domain,
    contains_name,
    email_domain,
    is_generic_domain,
    is_no_reply,
    name_key,
    normalize_address,
)
from .resolver import CompanyMatch, CompanyMatcher, MatchRule, resolve_company
from .self_addresses import infer_self_addresses

__all__ = [
    "GENERIC_DOMAINS",
    "CompanyMatch",
    "CompanyMatcher",
    "MatchRule",
    "company_matches",
    "company_name_from_domain",
    "contains_name",
    "email_domain",
    "infer_self_addresses",
    "is_generic_domain",
    "is_no_reply",
    "name_key",
    "normalize_address",
    "resolve_company",
]
