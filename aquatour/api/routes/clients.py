"""Client Routes — client CRUD plus clients registered by a given user."""

from fastapi import Depends

from aquatour.api.dependencies import get_clients
from aquatour.api.routes.crud import build_crud_router
from aquatour.services.client_repository import ClientRepository

router = build_crud_router(
    prefix="/api/clients", singular="client", plural="clients",
    get_repository=get_clients,
)


@router.get("/user/{user_id}")
async def list_clients_by_user(
    user_id: int, repo: ClientRepository = Depends(get_clients),
):
    return {"ok": True, "clients": await repo.find_by_user(user_id)}
