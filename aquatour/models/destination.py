"""Destination ORM — cities packages and reservations travel to.

Invariants:
    - provider_id optional; cleared when the provider is deleted
"""

from decimal import Decimal

from sqlalchemy import String, Text, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from aquatour.db.base import Base


class Destination(Base):
    __tablename__ = "destinations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    average_climate: Mapped[str | None] = mapped_column(String(100), nullable=True)
    high_season: Mapped[str | None] = mapped_column(String(100), nullable=True)
    main_language: Mapped[str | None] = mapped_column(String(50), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(20), nullable=True)
    base_price: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True,
    )
    provider_id: Mapped[int | None] = mapped_column(
        ForeignKey("providers.id", ondelete="SET NULL"), nullable=True,
    )
