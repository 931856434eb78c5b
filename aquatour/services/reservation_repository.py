"""Reservation Repository — bookings with their paid total.

Invariants:
    - employee_id is fixed at creation (not updatable)
    - end_date is never before start_date; party_size >= 1
    - total_paid = sum of payment amounts, computed on read, 0 when unpaid
    - Deletion blocked while payments reference the reservation
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from aquatour.core.coercion import parse_date, parse_datetime, parse_decimal, parse_int
from aquatour.core.domain_types import EntityKind
from aquatour.core.errors import ValidationError
from aquatour.core.field_aliases import FieldSpec
from aquatour.models import Client, Destination, Payment, Reservation, TourPackage, User
from aquatour.services.entity_repository import EntityRepository


class ReservationRepository(EntityRepository):
    kind = EntityKind.RESERVATION
    model = Reservation
    fields = (
        FieldSpec("reserved_at", parse=parse_datetime, nullable=False),
        FieldSpec("party_size", required=True, parse=parse_int),
        FieldSpec("total_price", required=True, parse=parse_decimal),
        FieldSpec("start_date", required=True, parse=parse_date),
        FieldSpec("end_date", required=True, parse=parse_date),
        FieldSpec("client_id", required=True, parse=parse_int),
        FieldSpec("package_id", parse=parse_int),
        FieldSpec("destination_id", parse=parse_int),
        FieldSpec("destination_price", parse=parse_decimal),
        FieldSpec("employee_id", required=True, parse=parse_int, updatable=False),
    )
    read_only_columns = ("total_paid",)
    references = {
        "client_id": Client,
        "package_id": TourPackage,
        "destination_id": Destination,
        "employee_id": User,
    }

    def base_query(self) -> Select:
        total_paid = (
            select(func.coalesce(func.sum(Payment.amount), 0))
            .where(Payment.reservation_id == Reservation.id)
            .correlate(Reservation)
            .scalar_subquery()
        )
        return select(*Reservation.__table__.c, total_paid.label("total_paid"))

    def order_by(self) -> tuple:
        return (Reservation.reserved_at.desc(), Reservation.id.desc())

    def project(self, row: dict) -> dict:
        out = super().project(row)
        out["total_paid"] = Decimal(str(row.get("total_paid") or 0))
        return out

    def display_name(self, record: dict) -> str | None:
        return f"Reservation #{record['id']}"

    def validate_record(self, values: dict[str, Any], existing: dict | None) -> None:
        current = {**(existing or {}), **values}
        start, end = current.get("start_date"), current.get("end_date")
        if start is not None and end is not None and end < start:
            raise ValidationError("end_date must not be before start_date", fields=["end_date"])
        party_size = values.get("party_size")
        if party_size is not None and party_size < 1:
            raise ValidationError("party_size must be >= 1", fields=["party_size"])

    async def find_by_employee(self, employee_id: int) -> list[dict]:
        return await self.find_where(Reservation.employee_id == employee_id)
