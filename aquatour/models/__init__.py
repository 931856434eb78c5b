"""ORM Models — SQLAlchemy declarative models for all CRM entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Unique fields carry per-table unique constraints; protected relations carry RESTRICT FKs

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata knows every table before
      create_all or Alembic autogenerate runs
"""

from aquatour.models.user import User  # noqa: F401
from aquatour.models.contact import Contact  # noqa: F401
from aquatour.models.client import Client  # noqa: F401
from aquatour.models.provider import Provider  # noqa: F401
from aquatour.models.destination import Destination  # noqa: F401
from aquatour.models.package import TourPackage  # noqa: F401
from aquatour.models.reservation import Reservation  # noqa: F401
from aquatour.models.quote import Quote  # noqa: F401
from aquatour.models.companion import Companion  # noqa: F401
from aquatour.models.payment import Payment  # noqa: F401
from aquatour.models.audit_log import AuditLog  # noqa: F401
from aquatour.models.access_log import AccessLog  # noqa: F401
