"""Referential Guard — refuses deletes while protected dependents still reference the row.

Invariants:
    - Dependents are counted in DELETE_GUARDS order; the first non-zero count fails
      and the remaining counts are not queried
    - Kinds without guards pass unconditionally
    - Runs inside the caller's transaction; RESTRICT foreign keys back it up in the store
"""

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute

from aquatour.core.domain_types import EntityKind
from aquatour.core.errors import ConflictError
from aquatour.core.integrity_rules import (
    blocking_dependents, dependency_conflict_message,
)
from aquatour.infrastructure.database import DataGateway
from aquatour.models import Payment, Quote, Reservation


_FOREIGN_KEYS: dict[tuple[EntityKind, EntityKind], InstrumentedAttribute] = {
    (EntityKind.CLIENT, EntityKind.QUOTE): Quote.client_id,
    (EntityKind.CLIENT, EntityKind.RESERVATION): Reservation.client_id,
    (EntityKind.PACKAGE, EntityKind.RESERVATION): Reservation.package_id,
    (EntityKind.PACKAGE, EntityKind.QUOTE): Quote.package_id,
    (EntityKind.RESERVATION, EntityKind.PAYMENT): Payment.reservation_id,
    (EntityKind.QUOTE, EntityKind.PAYMENT): Payment.quote_id,
}


class ReferentialGuard:
    """Counts blocking dependents before a delete."""

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    async def count_dependents(
        self, entity_kind: EntityKind, dependent: EntityKind, entity_id: int,
    ) -> int:
        foreign_key = _FOREIGN_KEYS[(entity_kind, dependent)]
        stmt = (
            select(func.count())
            .select_from(foreign_key.class_)
            .where(foreign_key == entity_id)
        )
        return int(await self.gateway.scalar(stmt) or 0)

    async def assert_deletable(self, entity_kind: EntityKind, entity_id: int) -> None:
        for dependent in blocking_dependents(entity_kind):
            count = await self.count_dependents(entity_kind, dependent, entity_id)
            if count > 0:
                raise ConflictError(
                    dependency_conflict_message(entity_kind, dependent, count),
                    conflict={
                        "entity": entity_kind.label,
                        "dependent": dependent.label,
                        "count": count,
                    },
                )
