"""Audit Log Routes — query, stats, manual entries and retention purge.

Invariants:
    - GET filters combine with AND; newest entries first
    - DELETE without older_than_days removes every entry
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from aquatour.api.dependencies import get_audit
from aquatour.schemas.logs import AuditLogCreate
from aquatour.services.audit_service import DEFAULT_LIMIT, AuditService

router = APIRouter(prefix="/api/audit-logs", tags=["audit-logs"])


@router.get("")
async def list_audit_logs(
    category: str | None = Query(None),
    user_id: int | None = Query(None),
    entity: str | None = Query(None),
    entity_id: int | None = Query(None),
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=5000),
    audit: AuditService = Depends(get_audit),
):
    logs = await audit.list_entries(
        category=category, user_id=user_id, entity=entity,
        entity_id=entity_id, start=start, end=end, limit=limit,
    )
    return {"ok": True, "logs": logs}


@router.get("/stats")
async def audit_stats(audit: AuditService = Depends(get_audit)):
    return {"ok": True, "stats": await audit.stats()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_audit_log(
    body: AuditLogCreate, audit: AuditService = Depends(get_audit),
):
    entry = await audit.create_entry(body.model_dump())
    return {"ok": True, "log": entry}


@router.delete("")
async def purge_audit_logs(
    older_than_days: int | None = Query(None, ge=0),
    audit: AuditService = Depends(get_audit),
):
    deleted = await audit.purge(older_than_days)
    return {"ok": True, "deleted": deleted}
