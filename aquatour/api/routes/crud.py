"""CRUD Router Factory — the five standard endpoints shared by every entity resource.

Invariants:
    - Responses use the envelope {"ok": true, <singular|plural>: ...}
    - POST returns 201; DELETE returns {"ok": true, "deleted": true}
    - Payloads are raw JSON objects: repositories resolve snake_case/camelCase aliases
    - POST carries the stricter creation rate limit

Design Decisions:
    - Factory over nine copies of the same handlers; resource modules add their
      extra endpoints to the returned router
    - Each handler gets a resource-specific __name__ before slowapi wraps it:
      slowapi registers limits per function name
"""

from typing import Any, Callable

from fastapi import APIRouter, Body, Depends, Request, status

from aquatour.api.dependencies import get_actor
from aquatour.core.domain_types import Actor
from aquatour.infrastructure.rate_limiter import CREATE_LIMIT, limiter


def _named(func: Callable, name: str) -> Callable:
    func.__name__ = name
    func.__qualname__ = name
    return func


def build_crud_router(
    *,
    prefix: str,
    singular: str,
    plural: str,
    get_repository: Callable[..., Any],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[plural])

    async def list_all(repo=Depends(get_repository)):
        return {"ok": True, plural: await repo.find_all()}

    async def get_one(entity_id: int, repo=Depends(get_repository)):
        return {"ok": True, singular: await repo.get(entity_id)}

    async def create(
        request: Request,
        payload: dict = Body(...),
        repo=Depends(get_repository),
        actor: Actor | None = Depends(get_actor),
    ):
        return {"ok": True, singular: await repo.create(payload, actor=actor)}

    async def update(
        entity_id: int,
        payload: dict = Body(...),
        repo=Depends(get_repository),
        actor: Actor | None = Depends(get_actor),
    ):
        return {"ok": True, singular: await repo.update(entity_id, payload, actor=actor)}

    async def remove(
        entity_id: int,
        repo=Depends(get_repository),
        actor: Actor | None = Depends(get_actor),
    ):
        return {"ok": True, "deleted": await repo.delete(entity_id, actor=actor)}

    router.get("")(_named(list_all, f"list_{plural}"))
    router.get("/{entity_id}")(_named(get_one, f"get_{singular}"))
    router.post("", status_code=status.HTTP_201_CREATED)(
        limiter.limit(CREATE_LIMIT)(_named(create, f"create_{singular}")),
    )
    router.put("/{entity_id}")(_named(update, f"update_{singular}"))
    router.delete("/{entity_id}")(_named(remove, f"delete_{singular}"))
    return router
