"""System Routes — destructive maintenance, superadministrador only."""

from fastapi import APIRouter, Depends

from aquatour.api.dependencies import get_actor, get_system
from aquatour.core.domain_types import Actor
from aquatour.services.system_service import SystemService

router = APIRouter(prefix="/api/system", tags=["system"])


@router.delete("/clear-all")
async def clear_all(
    actor: Actor | None = Depends(get_actor),
    system: SystemService = Depends(get_system),
):
    cleared = await system.clear_all(actor)
    return {"ok": True, "message": "CRM cleared", "cleared": cleared}
