"""Access Log Routes — open and close login sessions, list them."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request, status

from aquatour.api.dependencies import get_access_logs
from aquatour.schemas.logs import AccessLogCreate
from aquatour.services.access_log_service import DEFAULT_LIMIT, AccessLogService

router = APIRouter(prefix="/api/access-logs", tags=["access-logs"])


@router.get("")
async def list_access_logs(
    user_id: int | None = Query(None),
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=5000),
    service: AccessLogService = Depends(get_access_logs),
):
    logs = await service.list_entries(user_id=user_id, start=start, end=end, limit=limit)
    return {"ok": True, "logs": logs}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_access_log(
    request: Request,
    body: AccessLogCreate,
    service: AccessLogService = Depends(get_access_logs),
):
    payload = body.model_dump()
    if payload["ip_address"] is None and request.client:
        payload["ip_address"] = request.client.host
    return {"ok": True, "log": await service.create(payload)}


@router.put("/{log_id}/logout")
async def logout(log_id: int, service: AccessLogService = Depends(get_access_logs)):
    entry = await service.logout(log_id)
    return {"ok": True, "log": entry, "session_duration": entry["session_duration"]}
