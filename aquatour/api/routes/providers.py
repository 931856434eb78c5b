"""Provider Routes — standard CRUD."""

from aquatour.api.dependencies import get_providers
from aquatour.api.routes.crud import build_crud_router

router = build_crud_router(
    prefix="/api/providers", singular="provider", plural="providers",
    get_repository=get_providers,
)
