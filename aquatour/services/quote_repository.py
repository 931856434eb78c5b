"""Quote Repository — priced proposals that own their companion list.

Invariants:
    - Projection always carries `companions` (possibly empty)
    - Companions given on create are inserted with the quote, in one transaction
    - A `companions` key on update replaces the whole set; absence leaves it untouched
    - Deletion blocked while payments reference the quote; companions cascade
"""

from typing import Any

from aquatour.core.coercion import parse_date, parse_decimal, parse_int
from aquatour.core.domain_types import Actor, EntityKind, EnumMappingMode
from aquatour.core.errors import ValidationError
from aquatour.core.field_aliases import FieldSpec
from aquatour.core.repository_protocols import AuditRecorder
from aquatour.infrastructure.database import DataGateway
from aquatour.models import Client, Quote, TourPackage, User
from aquatour.services.companion_repository import CompanionRepository
from aquatour.services.entity_repository import EntityRepository


class QuoteRepository(EntityRepository):
    kind = EntityKind.QUOTE
    model = Quote
    fields = (
        FieldSpec("start_date", required=True, parse=parse_date),
        FieldSpec("end_date", required=True, parse=parse_date),
        FieldSpec("estimated_price", parse=parse_decimal, aliases=("price",), nullable=False),
        FieldSpec("package_id", parse=parse_int),
        FieldSpec("client_id", required=True, parse=parse_int),
        FieldSpec("employee_id", required=True, parse=parse_int),
    )
    read_only_columns = ("created_at",)
    defaults = {"estimated_price": 0}
    references = {"client_id": Client, "package_id": TourPackage, "employee_id": User}

    def __init__(
        self,
        gateway: DataGateway,
        audit: AuditRecorder | None = None,
        enum_mode: EnumMappingMode = EnumMappingMode.STRICT,
    ):
        super().__init__(gateway, audit, enum_mode)
        self.companions = CompanionRepository(gateway)

    def order_by(self) -> tuple:
        return (Quote.created_at.desc(), Quote.id.desc())

    async def project_rows(self, rows: list[dict]) -> list[dict]:
        records = [self.project(row) for row in rows]
        grouped = await self.companions.find_by_quotes([r["id"] for r in records])
        for record in records:
            record["companions"] = grouped.get(record["id"], [])
        return records

    def display_name(self, record: dict) -> str | None:
        return f"Quote #{record['id']}"

    def validate_record(self, values: dict[str, Any], existing: dict | None) -> None:
        current = {**(existing or {}), **values}
        start, end = current.get("start_date"), current.get("end_date")
        if start is not None and end is not None and end < start:
            raise ValidationError("end_date must not be before start_date", fields=["end_date"])

    def child_updates(self, payload: dict) -> list | None:
        if "companions" not in payload:
            return None
        companions = payload["companions"]
        if companions is None:
            return []
        if not isinstance(companions, list):
            raise ValidationError("companions must be a list", fields=["companions"])
        return companions

    async def apply_children(self, entity_id: int, children: list) -> None:
        await self.companions.replace_for_quote(entity_id, children)

    async def update_companions(
        self, quote_id: int, companions: list, *, actor: Actor | None = None,
    ) -> list[dict]:
        """Replace the full companion set of a quote."""
        if not isinstance(companions, list):
            raise ValidationError("companions must be a list", fields=["companions"])
        async with self.gateway.transaction():
            await self.get(quote_id)
            replaced = await self.companions.replace_for_quote(quote_id, companions)
        await self._record(
            actor, "update_companions", quote_id, {"id": quote_id},
            {"count": len(replaced)},
        )
        return replaced

    async def find_by_employee(self, employee_id: int) -> list[dict]:
        return await self.find_where(Quote.employee_id == employee_id)
