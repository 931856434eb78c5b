"""Reservation ORM — a confirmed booking for a client.

Invariants:
    - client_id and employee_id always set
    - Cannot be deleted while payments reference it (guard + RESTRICT FK on payments)
    - total_paid is a projection (sum of payments), never stored

Design Decisions:
    - package_id RESTRICT, destination_id SET NULL: a booked package must outlive its bookings,
      a destination row can be retired
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Integer, Numeric, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from aquatour.db.base import Base


class Reservation(Base):
    """Reservation entity — paid for by payments."""
    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    reserved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False,
    )
    package_id: Mapped[int | None] = mapped_column(
        ForeignKey("packages.id", ondelete="RESTRICT"), nullable=True,
    )
    destination_id: Mapped[int | None] = mapped_column(
        ForeignKey("destinations.id", ondelete="SET NULL"), nullable=True,
    )
    destination_price: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True,
    )
    employee_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False,
    )
