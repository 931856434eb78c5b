"""Quote ORM — a priced travel proposal for a client.

Invariants:
    - client_id and employee_id always set; estimated_price defaults to 0
    - Companions are owned: deleting a quote deletes its companions (CASCADE)
    - Cannot be deleted while payments reference it
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Numeric, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from aquatour.db.base import Base


class Quote(Base):
    """Quote entity — aggregate root for its companions."""
    __tablename__ = "quotes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    estimated_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=0,
    )
    package_id: Mapped[int | None] = mapped_column(
        ForeignKey("packages.id", ondelete="RESTRICT"), nullable=True,
    )
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False,
    )
    employee_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
