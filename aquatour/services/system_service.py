"""System Service — superadministrador-only wipe of CRM business data.

Invariants:
    - Only an actor with role superadministrador may clear data
    - Users, audit logs and access logs are kept
    - Tables are cleared children first, in one transaction
    - The audit event is written before the wipe
"""

import logging

from sqlalchemy import delete

from aquatour.core.domain_types import Actor, EntityKind
from aquatour.core.errors import ForbiddenError
from aquatour.core.repository_protocols import AuditRecorder
from aquatour.infrastructure.database import DataGateway
from aquatour.models import (
    Client, Companion, Contact, Destination, Payment, Provider,
    Quote, Reservation, TourPackage,
)

logger = logging.getLogger(__name__)

_CLEAR_ORDER = (
    Payment, Reservation, Companion, Quote, Client,
    TourPackage, Destination, Contact, Provider,
)


class SystemService:
    def __init__(self, gateway: DataGateway, audit: AuditRecorder | None = None):
        self.gateway = gateway
        self.audit = audit

    async def clear_all(self, actor: Actor | None) -> dict[str, int]:
        if actor is None or not actor.is_superadmin:
            raise ForbiddenError("Only the superadministrador can clear the CRM")

        if self.audit is not None:
            await self.audit.record(
                actor, "clear_all", EntityKind.SYSTEM, None,
                entity_name="Entire CRM",
                details={"tables": [m.__tablename__ for m in _CLEAR_ORDER]},
            )

        cleared: dict[str, int] = {}
        async with self.gateway.transaction():
            for model in _CLEAR_ORDER:
                result = await self.gateway.execute(delete(model))
                cleared[model.__tablename__] = result.rowcount
        logger.warning(
            f"CRM cleared: {cleared}", extra={"actor_id": actor.user_id},
        )
        return cleared
