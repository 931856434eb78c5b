"""Audit Service — best-effort audit recording plus query, stats and retention purge.

Invariants:
    - record() never raises: a failed audit write is logged and the mutation stands
    - record() runs in its own transaction, after the audited mutation committed
    - Category derives from the actor's role (administrador | asesor)
    - Entries are append-only; only purge() deletes them

Design Decisions:
    - One class implements the AuditRecorder protocol and the read side: both halves
      share the audit_logs table and nothing else
    - details stored as JSON text so any dict (previous/new values) fits without a schema
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import delete, func, insert, select

from aquatour.core.domain_types import Actor, AuditCategory, EntityKind
from aquatour.core.errors import ValidationError
from aquatour.infrastructure.database import DataGateway
from aquatour.models import AuditLog

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000
STATS_WINDOW_DAYS = 30


def _encode_details(details: Any) -> str | None:
    if details is None:
        return None
    if isinstance(details, str):
        return details
    return json.dumps(details, ensure_ascii=False, default=str)


class AuditService:
    """SQL-backed AuditRecorder and audit log reader."""

    def __init__(self, gateway: DataGateway, enabled: bool = True):
        self.gateway = gateway
        self.enabled = enabled

    # ─── Recording ───────────────────────────────────────────────

    async def record(
        self,
        actor: Actor | None,
        action: str,
        entity_kind: EntityKind,
        entity_id: int | None,
        entity_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if not self.enabled:
            return
        actor = actor or Actor()
        values = {
            "user_id": actor.user_id,
            "user_name": actor.name,
            "user_role": actor.role,
            "action": action,
            "category": actor.category.value,
            "entity": entity_kind.display_name,
            "entity_id": entity_id,
            "entity_name": entity_name,
            "details": _encode_details(details),
        }
        try:
            async with self.gateway.transaction():
                await self.gateway.execute(insert(AuditLog).values(**values))
        except Exception as e:
            logger.error(
                f"Audit write failed for {action}: {e}",
                extra={"entity": entity_kind.label, "entity_id": entity_id,
                       "actor_id": actor.user_id, "action": action},
            )

    async def create_entry(self, payload: dict) -> dict:
        """Manual entry posted by a client application."""
        action = payload.get("action")
        if not action:
            raise ValidationError("Missing required fields: action", fields=["action"])
        category = payload.get("category")
        if category is None:
            category = Actor(role=payload.get("user_role")).category.value
        elif category not in {c.value for c in AuditCategory}:
            raise ValidationError(
                f"Invalid category '{category}'", fields=["category"],
            )
        values = {
            "user_id": payload.get("user_id"),
            "user_name": payload.get("user_name"),
            "user_role": payload.get("user_role"),
            "action": action,
            "category": category,
            "entity": payload.get("entity"),
            "entity_id": payload.get("entity_id"),
            "entity_name": payload.get("entity_name"),
            "details": _encode_details(payload.get("details")),
        }
        async with self.gateway.transaction():
            result = await self.gateway.execute(insert(AuditLog).values(**values))
            entry_id = result.inserted_primary_key[0]
        return await self.gateway.query_one(
            select(*AuditLog.__table__.c).where(AuditLog.id == entry_id),
        )

    # ─── Reading ─────────────────────────────────────────────────

    async def list_entries(
        self,
        category: str | None = None,
        user_id: int | None = None,
        entity: str | None = None,
        entity_id: int | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[dict]:
        stmt = select(*AuditLog.__table__.c)
        if category is not None:
            stmt = stmt.where(AuditLog.category == category)
        if user_id is not None:
            stmt = stmt.where(AuditLog.user_id == user_id)
        if entity is not None:
            stmt = stmt.where(AuditLog.entity == entity)
        if entity_id is not None:
            stmt = stmt.where(AuditLog.entity_id == entity_id)
        if start is not None:
            stmt = stmt.where(AuditLog.created_at >= start)
        if end is not None:
            stmt = stmt.where(AuditLog.created_at <= end)
        stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit)
        return await self.gateway.query(stmt)

    async def stats(self) -> dict:
        count = func.count().label("count")
        total = await self.gateway.scalar(select(func.count()).select_from(AuditLog))
        by_category = await self.gateway.query(
            select(AuditLog.category, count).group_by(AuditLog.category),
        )
        by_action = await self.gateway.query(
            select(AuditLog.action, count)
            .group_by(AuditLog.action)
            .order_by(count.desc())
            .limit(10),
        )
        top_users = await self.gateway.query(
            select(AuditLog.user_id, AuditLog.user_name, AuditLog.user_role, count)
            .group_by(AuditLog.user_id, AuditLog.user_name, AuditLog.user_role)
            .order_by(count.desc())
            .limit(10),
        )
        since = datetime.now(timezone.utc) - timedelta(days=STATS_WINDOW_DAYS)
        day = func.date(AuditLog.created_at).label("day")
        daily_activity = await self.gateway.query(
            select(day, count)
            .where(AuditLog.created_at >= since)
            .group_by(day)
            .order_by(day.desc()),
        )
        return {
            "total": int(total or 0),
            "by_category": by_category,
            "by_action": by_action,
            "top_users": top_users,
            "daily_activity": daily_activity,
        }

    # ─── Retention ───────────────────────────────────────────────

    async def purge(self, older_than_days: int | None = None) -> int:
        """Delete entries older than N days, or every entry when N is None."""
        stmt = delete(AuditLog)
        if older_than_days is not None:
            if older_than_days < 0:
                raise ValidationError(
                    "older_than_days must be >= 0", fields=["older_than_days"],
                )
            cutoff = datetime.now(timezone.utc) - timedelta(days=older_than_days)
            stmt = stmt.where(AuditLog.created_at < cutoff)
        async with self.gateway.transaction():
            result = await self.gateway.execute(stmt)
        logger.info(f"Purged {result.rowcount} audit entries")
        return result.rowcount
