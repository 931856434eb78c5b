"""Payment Routes — payment CRUD plus payments by reservation, by quote and by advisor."""

from fastapi import Depends

from aquatour.api.dependencies import get_payments
from aquatour.api.routes.crud import build_crud_router
from aquatour.services.payment_repository import PaymentRepository

router = build_crud_router(
    prefix="/api/payments", singular="payment", plural="payments",
    get_repository=get_payments,
)


@router.get("/reservation/{reservation_id}")
async def list_payments_by_reservation(
    reservation_id: int, repo: PaymentRepository = Depends(get_payments),
):
    return {"ok": True, "payments": await repo.find_by_reservation(reservation_id)}


@router.get("/quote/{quote_id}")
async def list_payments_by_quote(
    quote_id: int, repo: PaymentRepository = Depends(get_payments),
):
    return {"ok": True, "payments": await repo.find_by_quote(quote_id)}


@router.get("/employee/{employee_id}")
async def list_payments_by_employee(
    employee_id: int, repo: PaymentRepository = Depends(get_payments),
):
    return {"ok": True, "payments": await repo.find_by_employee(employee_id)}
