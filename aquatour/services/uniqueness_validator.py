"""Uniqueness Validator — global email/phone/document uniqueness across users, clients, providers, contacts.

Invariants:
    - Re-queries the store on every call (no cached state)
    - Tables are scanned in UNIQUENESS_DOMAINS order; the first match wins
    - Exclusion removes one row (exclude_table + exclude_id), never a whole table
    - Empty normalized values are never checked

Design Decisions:
    - Column map lives here, rules in core/uniqueness_rules.py (ADR: functional core)
    - Per-table unique constraints are the authoritative guard; this check only produces
      the friendly 409 message naming the entity that holds the value
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute

from aquatour.core.domain_types import Conflict, EntityKind, UniqueField
from aquatour.core.errors import ConflictError
from aquatour.core.uniqueness_rules import (
    conflict_message, normalize_unique_value, search_order,
)
from aquatour.infrastructure.database import DataGateway
from aquatour.models import Client, Contact, Provider, User

logger = logging.getLogger(__name__)


_UNIQUE_COLUMNS: dict[tuple[EntityKind, UniqueField], InstrumentedAttribute] = {
    (EntityKind.USER, UniqueField.EMAIL): User.email,
    (EntityKind.USER, UniqueField.PHONE): User.phone,
    (EntityKind.USER, UniqueField.DOCUMENT): User.document_number,
    (EntityKind.CLIENT, UniqueField.EMAIL): Client.email,
    (EntityKind.CLIENT, UniqueField.PHONE): Client.phone,
    (EntityKind.CLIENT, UniqueField.DOCUMENT): Client.document_number,
    (EntityKind.PROVIDER, UniqueField.EMAIL): Provider.email,
    (EntityKind.PROVIDER, UniqueField.PHONE): Provider.phone,
    (EntityKind.CONTACT, UniqueField.EMAIL): Contact.email,
    (EntityKind.CONTACT, UniqueField.PHONE): Contact.phone,
}

_TABLES: dict[EntityKind, str] = {
    EntityKind.USER: User.__tablename__,
    EntityKind.CLIENT: Client.__tablename__,
    EntityKind.PROVIDER: Provider.__tablename__,
    EntityKind.CONTACT: Contact.__tablename__,
}


def _table_name(table: str | EntityKind | None) -> str | None:
    if isinstance(table, EntityKind):
        return _TABLES.get(table)
    return table


class UniquenessValidator:
    """Checks a candidate value against every table in its uniqueness domain."""

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    async def check_value_exists(
        self,
        value: object,
        field: UniqueField,
        exclude_table: str | EntityKind | None = None,
        exclude_id: int | None = None,
    ) -> Conflict | None:
        normalized = normalize_unique_value(value, field)
        if normalized is None:
            return None

        excluded = _table_name(exclude_table)
        for kind in search_order(field):
            column = _UNIQUE_COLUMNS[(kind, field)]
            model = column.class_
            stmt = select(model.id, column).where(column == normalized)
            if excluded == model.__tablename__ and exclude_id is not None:
                stmt = stmt.where(model.id != exclude_id)
            row = await self.gateway.query_one(stmt.limit(1))
            if row is not None:
                return Conflict(
                    table=model.__tablename__, entity_kind=kind,
                    conflicting_row=row,
                )
        return None

    async def validate_unique(
        self,
        value: object,
        field: UniqueField,
        exclude_table: str | EntityKind | None = None,
        exclude_id: int | None = None,
    ) -> None:
        conflict = await self.check_value_exists(
            value, field, exclude_table=exclude_table, exclude_id=exclude_id,
        )
        if conflict is None:
            return
        logger.info(
            f"{field.value} conflict with {conflict.table}",
            extra={"entity": conflict.entity_kind.label,
                   "entity_id": conflict.conflicting_row.get("id")},
        )
        raise ConflictError(
            conflict_message(field, conflict), conflict=conflict.to_dict(),
        )
