"""Enumeration Mappings — bidirectional app <-> DB vocabularies for role, document type, gender.

Invariants:
    - to_db/from_db are total in LENIENT mode: unmapped values fall back to a fixed default
    - STRICT mode raises ValidationError for unmapped input, DataIntegrityError for unmapped stored values
    - Extra DB aliases (legacy labels) only read back; writes always use the primary DB value

Design Decisions:
    - One BidirectionalMapping per enumeration instead of scattered if/else chains (ADR: single source)
    - STRICT is the default: an unmapped value fails loudly instead of being silently replaced
    - None passes through both directions unchanged in both modes
"""

from dataclasses import dataclass, field

from aquatour.core.domain_types import EnumMappingMode, Role
from aquatour.core.errors import DataIntegrityError, ValidationError


_PASSTHROUGH = object()


@dataclass(frozen=True)
class BidirectionalMapping:
    """Explicit mapping between the application vocabulary and the stored one."""
    name: str
    app_to_db: dict[str, str]
    db_aliases: dict[str, str] = field(default_factory=dict)
    # Lenient fallbacks; _PASSTHROUGH keeps the value as given
    default_db: object = _PASSTHROUGH
    default_app: object = _PASSTHROUGH

    @property
    def db_to_app(self) -> dict[str, str]:
        reverse = {db: app for app, db in self.app_to_db.items()}
        reverse.update(self.db_aliases)
        return reverse

    def to_db(
        self, value: str | None, mode: EnumMappingMode = EnumMappingMode.STRICT,
    ) -> str | None:
        if value is None:
            return None
        if value in self.app_to_db:
            return self.app_to_db[value]
        if mode == EnumMappingMode.STRICT:
            allowed = ", ".join(self.app_to_db)
            raise ValidationError(
                f"Invalid {self.name} '{value}'. Allowed values: {allowed}",
                fields=[self.name],
            )
        return value if self.default_db is _PASSTHROUGH else self.default_db

    def from_db(
        self, value: str | None, mode: EnumMappingMode = EnumMappingMode.STRICT,
    ) -> str | None:
        if value is None:
            return None
        reverse = self.db_to_app
        if value in reverse:
            return reverse[value]
        if mode == EnumMappingMode.STRICT:
            raise DataIntegrityError(
                f"Stored {self.name} '{value}' has no application equivalent"
            )
        return value if self.default_app is _PASSTHROUGH else self.default_app


ROLE_MAPPING = BidirectionalMapping(
    name="role",
    app_to_db={
        Role.SUPERADMIN.value: "Superadministrador",
        Role.ADMIN.value: "Administrador",
        Role.EMPLOYEE.value: "Asesor",
    },
    db_aliases={"Cliente": Role.EMPLOYEE.value},
    default_db="Asesor",
    default_app=Role.EMPLOYEE.value,
)

DOCUMENT_TYPE_MAPPING = BidirectionalMapping(
    name="document_type",
    app_to_db={
        "CC": "Cedula Ciudadania",
        "TI": "Tarjeta Identidad",
        "PP": "Pasaporte",
        "CE": "Documento Extranjeria",
        "NIT": "NIT",
    },
)

GENDER_MAPPING = BidirectionalMapping(
    name="gender",
    app_to_db={
        "Masculino": "M",
        "Femenino": "F",
        "Otro": "Otro",
    },
    default_db="Otro",
    default_app="Otro",
)
