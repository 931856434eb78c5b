"""Domain Types — enums and value objects shared by the validator, guard and repositories.

Invariants:
    - EntityKind is the single vocabulary for tables in uniqueness scans and delete guards
    - Role values are the wire vocabulary accepted from and returned to clients
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Conflict as frozen dataclass: validator returns it, ConflictError carries its dict form
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ─── Enums ───────────────────────────────────────────────────────

class EntityKind(str, Enum):
    """Every persisted CRM entity, plus SYSTEM for whole-CRM audit events.

    Value is the human-readable display name.
    """
    USER = "User"
    CLIENT = "Client"
    PROVIDER = "Provider"
    CONTACT = "Contact"
    DESTINATION = "Destination"
    PACKAGE = "Package"
    RESERVATION = "Reservation"
    QUOTE = "Quote"
    COMPANION = "Companion"
    PAYMENT = "Payment"
    SYSTEM = "System"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Lower-case singular used in messages and audit entries."""
        return self.value.lower()


class UniqueField(str, Enum):
    """Fields whose values must be unique across the uniqueness domain."""
    EMAIL = "email"
    PHONE = "phone"
    DOCUMENT = "document"


class Role(str, Enum):
    """Application roles. SUPERADMIN is the protected top-level role."""
    SUPERADMIN = "superadministrador"
    ADMIN = "administrador"
    EMPLOYEE = "empleado"


class AuditCategory(str, Enum):
    """Audit log partition derived from the acting user's role."""
    ADMINISTRATOR = "administrador"
    ADVISOR = "asesor"


class EnumMappingMode(str, Enum):
    """How unmapped enumeration values are treated."""
    STRICT = "strict"
    LENIENT = "lenient"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class Conflict:
    """First record found holding a value that must be unique."""
    table: str
    entity_kind: EntityKind
    conflicting_row: dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.entity_kind.display_name

    def to_dict(self) -> dict:
        return {
            "table": self.table,
            "entity": self.entity_kind.label,
            "displayName": self.display_name,
            "data": self.conflicting_row,
        }


@dataclass(frozen=True)
class Actor:
    """The user performing a request, as far as the request identifies them."""
    user_id: int | None = None
    name: str | None = None
    role: str | None = None

    @property
    def category(self) -> AuditCategory:
        if self.role in (Role.SUPERADMIN.value, Role.ADMIN.value):
            return AuditCategory.ADMINISTRATOR
        return AuditCategory.ADVISOR

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN.value
