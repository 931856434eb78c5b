"""Payment Repository — payments against exactly one reservation or quote.

Invariants:
    - After create/update exactly one of reservation_id / quote_id is set
    - amount > 0
    - find_by_employee covers payments of the employee's reservations and quotes
"""

from typing import Any

from sqlalchemy import or_

from aquatour.core.coercion import parse_datetime, parse_decimal, parse_int
from aquatour.core.domain_types import EntityKind
from aquatour.core.errors import ValidationError
from aquatour.core.field_aliases import FieldSpec
from aquatour.models import Payment, Quote, Reservation
from aquatour.services.entity_repository import EntityRepository


class PaymentRepository(EntityRepository):
    kind = EntityKind.PAYMENT
    model = Payment
    fields = (
        FieldSpec("paid_at", parse=parse_datetime, nullable=False),
        FieldSpec("method", required=True),
        FieldSpec("issuing_bank"),
        FieldSpec("reference_number", required=True),
        FieldSpec("amount", required=True, parse=parse_decimal),
        FieldSpec("reservation_id", parse=parse_int),
        FieldSpec("quote_id", parse=parse_int),
    )
    references = {"reservation_id": Reservation, "quote_id": Quote}

    def order_by(self) -> tuple:
        return (Payment.paid_at.desc(), Payment.id.desc())

    def display_name(self, record: dict) -> str | None:
        return record.get("reference_number")

    def validate_record(self, values: dict[str, Any], existing: dict | None) -> None:
        current = {**(existing or {}), **values}
        targets = [
            name for name in ("reservation_id", "quote_id")
            if current.get(name) is not None
        ]
        if len(targets) != 1:
            raise ValidationError(
                "Payment must reference exactly one of reservation_id or quote_id",
                fields=["reservation_id", "quote_id"],
            )
        amount = values.get("amount")
        if amount is not None and amount <= 0:
            raise ValidationError("amount must be > 0", fields=["amount"])

    async def find_by_reservation(self, reservation_id: int) -> list[dict]:
        return await self.find_where(Payment.reservation_id == reservation_id)

    async def find_by_quote(self, quote_id: int) -> list[dict]:
        return await self.find_where(Payment.quote_id == quote_id)

    async def find_by_employee(self, employee_id: int) -> list[dict]:
        stmt = (
            self.base_query()
            .outerjoin(Reservation, Payment.reservation_id == Reservation.id)
            .outerjoin(Quote, Payment.quote_id == Quote.id)
            .where(or_(
                Reservation.employee_id == employee_id,
                Quote.employee_id == employee_id,
            ))
            .order_by(*self.order_by())
        )
        return await self.project_rows(await self.gateway.query(stmt))
