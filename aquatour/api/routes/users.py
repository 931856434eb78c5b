"""User Routes — user CRUD plus email availability for sign-up forms.

Invariants:
    - Responses never include password digests
    - check-email reports availability across users, clients, providers and contacts
"""

from fastapi import Depends, Query

from aquatour.api.dependencies import get_users
from aquatour.api.routes.crud import build_crud_router
from aquatour.core.uniqueness_rules import conflict_message
from aquatour.core.domain_types import UniqueField
from aquatour.services.user_repository import UserRepository

router = build_crud_router(
    prefix="/api/users", singular="user", plural="users",
    get_repository=get_users,
)


@router.get("/check-email/{email}")
async def check_email(
    email: str,
    exclude: int | None = Query(None, description="User id to ignore (self-edit)"),
    repo: UserRepository = Depends(get_users),
):
    conflict = await repo.check_email(email, exclude_id=exclude)
    if conflict is None:
        return {"ok": True, "available": True}
    return {
        "ok": True,
        "available": False,
        "message": conflict_message(UniqueField.EMAIL, conflict),
        "conflict": conflict.to_dict(),
    }
