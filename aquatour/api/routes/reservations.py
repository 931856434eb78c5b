"""Reservation Routes — reservation CRUD plus an advisor's reservations."""

from fastapi import Depends

from aquatour.api.dependencies import get_reservations
from aquatour.api.routes.crud import build_crud_router
from aquatour.services.reservation_repository import ReservationRepository

router = build_crud_router(
    prefix="/api/reservations", singular="reservation", plural="reservations",
    get_repository=get_reservations,
)


@router.get("/employee/{employee_id}")
async def list_reservations_by_employee(
    employee_id: int, repo: ReservationRepository = Depends(get_reservations),
):
    return {"ok": True, "reservations": await repo.find_by_employee(employee_id)}
