"""Initial schema — users, clients, contacts, providers, catalog, bookings, logs.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("document_type", sa.String(50), nullable=True),
        sa.Column("document_number", sa.String(50), nullable=True, unique=True),
        sa.Column("birth_date", sa.Date, nullable=True),
        sa.Column("birth_place", sa.String(150), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True, unique=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("password_digest", sa.Text, nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="Asesor"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("phone", sa.String(30), nullable=False, unique=True),
        sa.Column("company", sa.String(150), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("phone", sa.String(30), nullable=False, unique=True),
        sa.Column("document_number", sa.String(50), nullable=False, unique=True),
        sa.Column("nationality", sa.String(100), nullable=False),
        sa.Column("passport", sa.String(50), nullable=False),
        sa.Column("marital_status", sa.String(30), nullable=False),
        sa.Column("travel_preferences", sa.Text, nullable=True),
        sa.Column("satisfaction", sa.Integer, nullable=False, server_default="3"),
        sa.Column("status", sa.String(20), nullable=False, server_default="activo"),
        sa.Column(
            "created_by_user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column(
            "contact_id", sa.Integer,
            sa.ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "providers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("provider_type", sa.String(50), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="activo"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "destinations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("average_climate", sa.String(100), nullable=True),
        sa.Column("high_season", sa.String(100), nullable=True),
        sa.Column("main_language", sa.String(50), nullable=True),
        sa.Column("currency", sa.String(20), nullable=True),
        sa.Column("base_price", sa.Numeric(12, 2), nullable=True),
        sa.Column(
            "provider_id", sa.Integer,
            sa.ForeignKey("providers.id", ondelete="SET NULL"), nullable=True,
        ),
    )

    op.create_table(
        "packages",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("base_price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("duration_days", sa.Integer, nullable=False, server_default="1"),
        sa.Column("max_capacity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("included_services", sa.Text, nullable=True),
        sa.Column("destination_ids", sa.JSON, nullable=False),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("reserved_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("party_size", sa.Integer, nullable=False),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column(
            "client_id", sa.Integer,
            sa.ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column(
            "package_id", sa.Integer,
            sa.ForeignKey("packages.id", ondelete="RESTRICT"), nullable=True,
        ),
        sa.Column(
            "destination_id", sa.Integer,
            sa.ForeignKey("destinations.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("destination_price", sa.Numeric(12, 2), nullable=True),
        sa.Column(
            "employee_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False,
        ),
    )

    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("estimated_price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column(
            "package_id", sa.Integer,
            sa.ForeignKey("packages.id", ondelete="RESTRICT"), nullable=True,
        ),
        sa.Column(
            "client_id", sa.Integer,
            sa.ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column(
            "employee_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "companions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "quote_id", sa.Integer,
            sa.ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("document_number", sa.String(50), nullable=True),
        sa.Column("nationality", sa.String(100), nullable=True),
        sa.Column("birth_date", sa.Date, nullable=True),
        sa.Column("is_minor", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_companions_quote_id", "companions", ["quote_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("method", sa.String(50), nullable=False),
        sa.Column("issuing_bank", sa.String(100), nullable=True),
        sa.Column("reference_number", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "reservation_id", sa.Integer,
            sa.ForeignKey("reservations.id", ondelete="RESTRICT"), nullable=True,
        ),
        sa.Column(
            "quote_id", sa.Integer,
            sa.ForeignKey("quotes.id", ondelete="RESTRICT"), nullable=True,
        ),
        sa.CheckConstraint(
            "(reservation_id IS NULL) <> (quote_id IS NULL)",
            name="ck_payments_single_target",
        ),
    )
    op.create_index("ix_payments_reservation_id", "payments", ["reservation_id"])
    op.create_index("ix_payments_quote_id", "payments", ["quote_id"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("user_name", sa.String(200), nullable=True),
        sa.Column("user_role", sa.String(50), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("entity", sa.String(50), nullable=True),
        sa.Column("entity_id", sa.Integer, nullable=True),
        sa.Column("entity_name", sa.String(255), nullable=True),
        sa.Column("details", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_category", "audit_logs", ["category"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])

    op.create_table(
        "access_logs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("user_name", sa.String(200), nullable=True),
        sa.Column("user_role", sa.String(50), nullable=True),
        sa.Column("logged_in_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("logged_out_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("session_duration", sa.String(50), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("browser", sa.String(100), nullable=True),
        sa.Column("operating_system", sa.String(100), nullable=True),
    )
    op.create_index("ix_access_logs_user_id", "access_logs", ["user_id"])


def downgrade() -> None:
    op.drop_table("access_logs")
    op.drop_table("audit_logs")
    op.drop_table("payments")
    op.drop_table("companions")
    op.drop_table("quotes")
    op.drop_table("reservations")
    op.drop_table("packages")
    op.drop_table("destinations")
    op.drop_table("providers")
    op.drop_table("clients")
    op.drop_table("contacts")
    op.drop_table("users")
