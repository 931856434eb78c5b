"""Companion Repository — people travelling on a quote, replaced as a whole set.

Invariants:
    - replace_for_quote deletes every companion of the quote, then inserts the new list
    - Replaced rows always get fresh ids; nothing is diffed or merged
    - Each companion needs first_name and last_name; nationality defaults to "Perú"
"""

from typing import Any

from sqlalchemy import delete, insert

from aquatour.core.coercion import parse_bool, parse_date
from aquatour.core.domain_types import EntityKind
from aquatour.core.errors import ValidationError
from aquatour.core.field_aliases import (
    FieldSpec, parse_values, require_fields, resolve_present, to_columns,
)
from aquatour.models import Companion
from aquatour.services.entity_repository import EntityRepository


class CompanionRepository(EntityRepository):
    kind = EntityKind.COMPANION
    model = Companion
    fields = (
        FieldSpec("first_name", required=True),
        FieldSpec("last_name", required=True),
        FieldSpec("document_number"),
        FieldSpec("nationality"),
        FieldSpec("birth_date", parse=parse_date),
        FieldSpec("is_minor", parse=parse_bool, nullable=False),
    )
    read_only_columns = ("quote_id", "created_at")
    defaults = {"nationality": "Perú", "is_minor": False}

    def order_by(self) -> tuple:
        return (Companion.created_at, Companion.id)

    def project(self, row: dict) -> dict:
        out = super().project(row)
        out["full_name"] = f"{row.get('first_name') or ''} {row.get('last_name') or ''}".strip()
        return out

    def display_name(self, record: dict) -> str | None:
        return record.get("full_name")

    async def find_by_quote(self, quote_id: int) -> list[dict]:
        return await self.find_where(Companion.quote_id == quote_id)

    async def find_by_quotes(self, quote_ids: list[int]) -> dict[int, list[dict]]:
        grouped: dict[int, list[dict]] = {quote_id: [] for quote_id in quote_ids}
        if not quote_ids:
            return grouped
        for companion in await self.find_where(Companion.quote_id.in_(quote_ids)):
            grouped.setdefault(companion["quote_id"], []).append(companion)
        return grouped

    def _build_rows(self, quote_id: int, companions: list[Any]) -> list[dict]:
        rows = []
        for index, payload in enumerate(companions):
            if not isinstance(payload, dict):
                raise ValidationError(
                    f"Companion #{index + 1} must be an object", fields=["companions"],
                )
            values = parse_values(resolve_present(payload, self.fields), self.fields)
            require_fields(values, self.fields)
            values = self.prepare_create(values)
            rows.append({**to_columns(values, self.fields), "quote_id": quote_id})
        return rows

    async def replace_for_quote(self, quote_id: int, companions: list[Any]) -> list[dict]:
        """Full replace: the quote ends up with exactly `companions`, as new rows."""
        rows = self._build_rows(quote_id, companions)
        async with self.gateway.transaction():
            await self.gateway.execute(
                delete(Companion).where(Companion.quote_id == quote_id),
            )
            for row in rows:
                await self.gateway.execute(insert(Companion).values(**row))
            return await self.find_by_quote(quote_id)
