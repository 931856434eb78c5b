"""User Repository — users with hashed passwords and mapped role/document/gender vocabularies.

Invariants:
    - password is hashed before it reaches the store; the digest is never projected
    - role, document_type and gender are written in the DB vocabulary, read in the app vocabulary
    - The superadministrador account cannot be deleted
    - email, phone and document_number are globally unique (see UniquenessValidator)
"""

from typing import Any

from sqlalchemy import select

from aquatour.core.coercion import parse_bool, parse_date
from aquatour.core.domain_types import (
    Conflict, EntityKind, EnumMappingMode, Role, UniqueField,
)
from aquatour.core.enum_mappings import (
    DOCUMENT_TYPE_MAPPING, GENDER_MAPPING, ROLE_MAPPING,
)
from aquatour.core.errors import ForbiddenError
from aquatour.core.field_aliases import FieldSpec
from aquatour.core.repository_protocols import AuditRecorder, PasswordHasher
from aquatour.infrastructure.database import DataGateway
from aquatour.infrastructure.password_hasher import BcryptPasswordHasher
from aquatour.models import User
from aquatour.services.entity_repository import EntityRepository


class UserRepository(EntityRepository):
    kind = EntityKind.USER
    model = User
    fields = (
        FieldSpec("first_name", required=True),
        FieldSpec("last_name", required=True),
        FieldSpec("email", required=True),
        FieldSpec("document_type"),
        FieldSpec("document_number"),
        FieldSpec("birth_date", parse=parse_date),
        FieldSpec("birth_place"),
        FieldSpec("gender"),
        FieldSpec("phone"),
        FieldSpec("address"),
        FieldSpec("city"),
        FieldSpec("country"),
        FieldSpec("password", column="password_digest", required=True, projected=False),
        FieldSpec("role", nullable=False),
        FieldSpec("is_active", parse=parse_bool, nullable=False),
    )
    unique_fields = (
        (UniqueField.EMAIL, "email"),
        (UniqueField.PHONE, "phone"),
        (UniqueField.DOCUMENT, "document_number"),
    )
    read_only_columns = ("created_at", "updated_at")
    defaults = {"role": Role.EMPLOYEE.value, "is_active": True}

    def __init__(
        self,
        gateway: DataGateway,
        audit: AuditRecorder | None = None,
        enum_mode: EnumMappingMode = EnumMappingMode.STRICT,
        hasher: PasswordHasher | None = None,
    ):
        super().__init__(gateway, audit, enum_mode)
        self.hasher = hasher or BcryptPasswordHasher()

    def order_by(self) -> tuple:
        return (User.created_at.desc(), User.id.desc())

    def project(self, row: dict) -> dict:
        out = super().project(row)
        out["role"] = ROLE_MAPPING.from_db(row.get("role"), self.enum_mode)
        out["document_type"] = DOCUMENT_TYPE_MAPPING.from_db(
            row.get("document_type"), self.enum_mode,
        )
        out["gender"] = GENDER_MAPPING.from_db(row.get("gender"), self.enum_mode)
        out["full_name"] = f"{row.get('first_name') or ''} {row.get('last_name') or ''}".strip()
        return out

    def display_name(self, record: dict) -> str | None:
        return record.get("full_name")

    def _to_store(self, values: dict[str, Any]) -> dict[str, Any]:
        if values.get("password") is not None:
            values["password"] = self.hasher.hash(str(values["password"]))
        if "role" in values:
            values["role"] = ROLE_MAPPING.to_db(values["role"], self.enum_mode)
        if "document_type" in values:
            values["document_type"] = DOCUMENT_TYPE_MAPPING.to_db(
                values["document_type"], self.enum_mode,
            )
        if "gender" in values:
            values["gender"] = GENDER_MAPPING.to_db(values["gender"], self.enum_mode)
        return values

    def prepare_create(self, values: dict[str, Any]) -> dict[str, Any]:
        return self._to_store(super().prepare_create(values))

    def prepare_update(self, values: dict[str, Any], existing: dict) -> dict[str, Any]:
        return self._to_store(values)

    def check_delete_allowed(self, record: dict) -> None:
        if record.get("role") == Role.SUPERADMIN.value:
            raise ForbiddenError("The superadministrador account cannot be deleted")

    # ─── Credentials ─────────────────────────────────────────────

    async def find_credentials(self, email: str) -> dict | None:
        """Raw row including password_digest, for login only."""
        return await self.gateway.query_one(
            select(*User.__table__.c).where(User.email == email.strip()),
        )

    async def check_email(
        self, email: str, exclude_id: int | None = None,
    ) -> Conflict | None:
        return await self.validator.check_value_exists(
            email, UniqueField.EMAIL,
            exclude_table=User.__tablename__, exclude_id=exclude_id,
        )
