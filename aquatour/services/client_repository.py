"""Client Repository — clients with creator names and global email/phone/document uniqueness.

Invariants:
    - created_by_user_id is set on create and never rewritten by update
    - Projection adds full_name and the creating user's names (LEFT JOIN users)
    - Deletion blocked while quotes or reservations reference the client
"""

from sqlalchemy import select
from sqlalchemy.sql import Select

from aquatour.core.coercion import parse_int
from aquatour.core.domain_types import EntityKind, UniqueField
from aquatour.core.field_aliases import FieldSpec
from aquatour.models import Client, Contact, User
from aquatour.services.entity_repository import EntityRepository


class ClientRepository(EntityRepository):
    kind = EntityKind.CLIENT
    model = Client
    fields = (
        FieldSpec("first_name", required=True),
        FieldSpec("last_name", required=True),
        FieldSpec("email", required=True),
        FieldSpec("phone", required=True),
        FieldSpec("document_number", required=True),
        FieldSpec("nationality", required=True),
        FieldSpec("passport", required=True),
        FieldSpec("marital_status", required=True),
        FieldSpec("travel_preferences"),
        FieldSpec("satisfaction", parse=parse_int, nullable=False),
        FieldSpec("status", nullable=False),
        FieldSpec(
            "created_by_user_id", required=True, parse=parse_int,
            aliases=("user_id", "userId"), updatable=False,
        ),
        FieldSpec("contact_id", parse=parse_int),
    )
    unique_fields = (
        (UniqueField.EMAIL, "email"),
        (UniqueField.PHONE, "phone"),
        (UniqueField.DOCUMENT, "document_number"),
    )
    read_only_columns = (
        "created_at", "updated_at",
        "created_by_first_name", "created_by_last_name",
    )
    defaults = {"satisfaction": 3, "status": "activo"}
    references = {"created_by_user_id": User, "contact_id": Contact}

    def base_query(self) -> Select:
        return (
            select(
                *Client.__table__.c,
                User.first_name.label("created_by_first_name"),
                User.last_name.label("created_by_last_name"),
            )
            .select_from(Client)
            .outerjoin(User, Client.created_by_user_id == User.id)
        )

    def order_by(self) -> tuple:
        return (Client.created_at.desc(), Client.id.desc())

    def project(self, row: dict) -> dict:
        out = super().project(row)
        out["full_name"] = f"{row.get('first_name') or ''} {row.get('last_name') or ''}".strip()
        return out

    def display_name(self, record: dict) -> str | None:
        return record.get("full_name")

    async def find_by_user(self, user_id: int) -> list[dict]:
        return await self.find_where(Client.created_by_user_id == user_id)
