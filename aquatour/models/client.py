"""Client ORM — travellers the agency sells to.

Invariants:
    - email, phone and document_number unique per table
    - phone stored as digits only, document_number as alphanumerics only
    - created_by_user_id always set; contact_id optional and cleared when the contact goes

Design Decisions:
    - travel_preferences as free text: advisors type it, nothing queries it
    - Deleting a client with quotes/reservations is blocked twice: ReferentialGuard first,
      then the RESTRICT foreign keys on quotes/reservations
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from aquatour.db.base import Base


class Client(Base):
    """Client entity — owner of quotes and reservations."""
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    document_number: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    nationality: Mapped[str] = mapped_column(String(100), nullable=False)
    passport: Mapped[str] = mapped_column(String(50), nullable=False)
    marital_status: Mapped[str] = mapped_column(String(30), nullable=False)
    travel_preferences: Mapped[str | None] = mapped_column(Text, nullable=True)
    satisfaction: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="activo",
    )
    created_by_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False,
    )
    contact_id: Mapped[int | None] = mapped_column(
        ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
