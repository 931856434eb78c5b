"""Access Log Service — login/logout session records.

Invariants:
    - A session is opened by create() and closed at most once by logout()
    - session_duration is computed from the stored login time, never trusted from the client
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import insert, select, update

from aquatour.core.access_rules import format_session_duration
from aquatour.core.coercion import parse_datetime
from aquatour.core.errors import NotFoundError, ValidationError
from aquatour.infrastructure.database import DataGateway
from aquatour.models import AccessLog

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000


class AccessLogService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    async def get(self, log_id: int) -> dict:
        row = await self.gateway.query_one(
            select(*AccessLog.__table__.c).where(AccessLog.id == log_id),
        )
        if row is None:
            raise NotFoundError("AccessLog", log_id)
        return row

    async def create(self, payload: dict) -> dict:
        logged_in_at = payload.get("logged_in_at")
        try:
            logged_in_at = (
                parse_datetime(logged_in_at) if logged_in_at
                else datetime.now(timezone.utc)
            )
        except ValueError as e:
            raise ValidationError(
                f"Invalid value for field 'logged_in_at': {e}", fields=["logged_in_at"],
            ) from e
        values = {
            "user_id": payload.get("user_id"),
            "user_name": payload.get("user_name"),
            "user_role": payload.get("user_role"),
            "logged_in_at": logged_in_at,
            "ip_address": payload.get("ip_address"),
            "browser": payload.get("browser"),
            "operating_system": payload.get("operating_system"),
        }
        async with self.gateway.transaction():
            result = await self.gateway.execute(insert(AccessLog).values(**values))
            log_id = result.inserted_primary_key[0]
            return await self.get(log_id)

    async def logout(self, log_id: int) -> dict:
        async with self.gateway.transaction():
            entry = await self.get(log_id)
            if entry["logged_out_at"] is not None:
                return entry
            logged_out_at = datetime.now(timezone.utc)
            duration = format_session_duration(entry["logged_in_at"], logged_out_at)
            await self.gateway.execute(
                update(AccessLog)
                .where(AccessLog.id == log_id)
                .values(logged_out_at=logged_out_at, session_duration=duration),
            )
            closed = await self.get(log_id)
        logger.info(
            f"Session {log_id} closed after {duration}",
            extra={"actor_id": closed["user_id"]},
        )
        return closed

    async def list_entries(
        self,
        user_id: int | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[dict]:
        stmt = select(*AccessLog.__table__.c)
        if user_id is not None:
            stmt = stmt.where(AccessLog.user_id == user_id)
        if start is not None:
            stmt = stmt.where(AccessLog.logged_in_at >= start)
        if end is not None:
            stmt = stmt.where(AccessLog.logged_in_at <= end)
        stmt = stmt.order_by(AccessLog.logged_in_at.desc(), AccessLog.id.desc()).limit(limit)
        return await self.gateway.query(stmt)
