"""User ORM — application users (advisors and administrators).

Invariants:
    - email, phone and document_number each unique per table (NULLs allowed for phone/document)
    - phone stored as digits only, document_number as alphanumerics only
    - role, document_type and gender stored in the DB vocabulary (core/enum_mappings.py)
    - password_digest never leaves the repository projection

Design Decisions:
    - Role as a label column instead of a roles table: three fixed values
    - Advisors that own reservations/quotes are plain users (employee_id -> users.id)
"""

from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Boolean, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from aquatour.db.base import Base


class User(Base):
    """Application user — logs in, creates clients, owns quotes and reservations."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    document_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    document_number: Mapped[str | None] = mapped_column(
        String(50), nullable=True, unique=True,
    )
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    birth_place: Mapped[str | None] = mapped_column(String(150), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True, unique=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password_digest: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(
        String(50), nullable=False, default="Asesor",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
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
