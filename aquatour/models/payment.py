"""Payment ORM — money received against a reservation or a quote.

Invariants:
    - Exactly one of reservation_id / quote_id is set (checked by the repository and a CHECK constraint)
    - Both references RESTRICT: paid reservations and quotes cannot be deleted
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    String, Numeric, DateTime, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from aquatour.db.base import Base


class Payment(Base):
    """Payment entity — leaf of the reservation/quote dependency chain."""
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint(
            "(reservation_id IS NULL) <> (quote_id IS NULL)",
            name="ck_payments_single_target",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    method: Mapped[str] = mapped_column(String(50), nullable=False)
    issuing_bank: Mapped[str | None] = mapped_column(String(100), nullable=True)
    reference_number: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    reservation_id: Mapped[int | None] = mapped_column(
        ForeignKey("reservations.id", ondelete="RESTRICT"), nullable=True, index=True,
    )
    quote_id: Mapped[int | None] = mapped_column(
        ForeignKey("quotes.id", ondelete="RESTRICT"), nullable=True, index=True,
    )
