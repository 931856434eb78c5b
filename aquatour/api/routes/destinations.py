"""Destination Routes — standard CRUD."""

from aquatour.api.dependencies import get_destinations
from aquatour.api.routes.crud import build_crud_router

router = build_crud_router(
    prefix="/api/destinations", singular="destination", plural="destinations",
    get_repository=get_destinations,
)
