"""Uniqueness Rules — pure normalization and scan order for global uniqueness checks.

Invariants:
    - Phone values compare as digits only; documents as ASCII alphanumerics only
    - Email compares exactly as given (no case folding)
    - An empty normalized value means "absent" and is never checked
    - UNIQUENESS_DOMAINS order is the scan order; the first match wins

Design Decisions:
    - Pure functions here, queries in services/uniqueness_validator.py (ADR: functional core)
    - Repositories store the normalized form, so the shell compares with plain equality
"""

import re

from aquatour.core.domain_types import Conflict, EntityKind, UniqueField


_NON_DIGITS = re.compile(r"\D")
_NON_ALNUM = re.compile(r"[^0-9A-Za-z]")

UNIQUENESS_DOMAINS: dict[UniqueField, tuple[EntityKind, ...]] = {
    UniqueField.EMAIL: (
        EntityKind.USER, EntityKind.CLIENT,
        EntityKind.PROVIDER, EntityKind.CONTACT,
    ),
    UniqueField.PHONE: (
        EntityKind.USER, EntityKind.CLIENT,
        EntityKind.PROVIDER, EntityKind.CONTACT,
    ),
    UniqueField.DOCUMENT: (EntityKind.USER, EntityKind.CLIENT),
}

_FIELD_LABELS = {
    UniqueField.EMAIL: "Email",
    UniqueField.PHONE: "Phone",
    UniqueField.DOCUMENT: "Document",
}


def normalize_phone(value: object) -> str | None:
    """Strip every non-digit character. Empty result means absent."""
    if value is None:
        return None
    digits = _NON_DIGITS.sub("", str(value))
    return digits or None


def normalize_document(value: object) -> str | None:
    """Strip every non-alphanumeric character. Empty result means absent."""
    if value is None:
        return None
    cleaned = _NON_ALNUM.sub("", str(value))
    return cleaned or None


def normalize_email(value: object) -> str | None:
    if value is None:
        return None
    email = str(value).strip()
    return email or None


_NORMALIZERS = {
    UniqueField.EMAIL: normalize_email,
    UniqueField.PHONE: normalize_phone,
    UniqueField.DOCUMENT: normalize_document,
}


def normalize_unique_value(value: object, field: UniqueField) -> str | None:
    return _NORMALIZERS[field](value)


def search_order(field: UniqueField) -> tuple[EntityKind, ...]:
    return UNIQUENESS_DOMAINS[field]


def conflict_message(field: UniqueField, conflict: Conflict) -> str:
    return (
        f"{_FIELD_LABELS[field]} already registered in the system "
        f"as {conflict.display_name}"
    )
