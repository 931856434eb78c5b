"""Quote Routes — quote CRUD, an advisor's quotes, and full replacement of companions.

Invariants:
    - PUT /{id}/companions replaces the whole set; [] removes every companion
"""

from fastapi import Depends

from aquatour.api.dependencies import get_actor, get_quotes
from aquatour.api.routes.crud import build_crud_router
from aquatour.core.domain_types import Actor
from aquatour.schemas.quote import CompanionsReplace
from aquatour.services.quote_repository import QuoteRepository

router = build_crud_router(
    prefix="/api/quotes", singular="quote", plural="quotes",
    get_repository=get_quotes,
)


@router.get("/employee/{employee_id}")
async def list_quotes_by_employee(
    employee_id: int, repo: QuoteRepository = Depends(get_quotes),
):
    return {"ok": True, "quotes": await repo.find_by_employee(employee_id)}


@router.put("/{quote_id}/companions")
async def replace_companions(
    quote_id: int,
    body: CompanionsReplace,
    repo: QuoteRepository = Depends(get_quotes),
    actor: Actor | None = Depends(get_actor),
):
    companions = await repo.update_companions(quote_id, body.companions, actor=actor)
    return {"ok": True, "companions": companions}
