"""Contact Routes — standard CRUD."""

from aquatour.api.dependencies import get_contacts
from aquatour.api.routes.crud import build_crud_router

router = build_crud_router(
    prefix="/api/contacts", singular="contact", plural="contacts",
    get_repository=get_contacts,
)
