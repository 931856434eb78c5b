"""TourPackage ORM — sellable bundles of destinations and services.

Invariants:
    - base_price >= 0 defaults to 0; duration_days and max_capacity default to 1
    - destination_ids is a JSON list of destination ids (no join table)

Design Decisions:
    - JSON list over a join table: the list is displayed, never queried (ADR: hackathon simplicity)
    - Class named TourPackage so it never shadows the Python notion of a package
"""

from decimal import Decimal

from sqlalchemy import String, Text, Integer, Numeric, JSON
from sqlalchemy.orm import Mapped, mapped_column

from aquatour.db.base import Base


class TourPackage(Base):
    """Tour package entity — referenced by reservations and quotes."""
    __tablename__ = "packages"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=0,
    )
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    included_services: Mapped[str | None] = mapped_column(Text, nullable=True)
    destination_ids: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
