"""Package Routes — standard CRUD; delete refused while reservations or quotes use the package."""

from aquatour.api.dependencies import get_packages
from aquatour.api.routes.crud import build_crud_router

router = build_crud_router(
    prefix="/api/packages", singular="package", plural="packages",
    get_repository=get_packages,
)
