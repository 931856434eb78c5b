"""Package Repository — tour packages with default pricing, duration and capacity.

Invariants:
    - base_price defaults to 0, duration_days and max_capacity to 1
    - base_price >= 0, duration_days >= 1, max_capacity >= 1
    - Deletion blocked while reservations or quotes reference the package
"""

from decimal import Decimal
from typing import Any

from aquatour.core.coercion import parse_decimal, parse_id_list, parse_int
from aquatour.core.domain_types import EntityKind
from aquatour.core.errors import ValidationError
from aquatour.core.field_aliases import FieldSpec
from aquatour.models import TourPackage
from aquatour.services.entity_repository import EntityRepository


class PackageRepository(EntityRepository):
    kind = EntityKind.PACKAGE
    model = TourPackage
    fields = (
        FieldSpec("name", required=True),
        FieldSpec("description"),
        FieldSpec("base_price", parse=parse_decimal, aliases=("price",), nullable=False),
        FieldSpec("duration_days", parse=parse_int, nullable=False),
        FieldSpec("max_capacity", parse=parse_int, nullable=False),
        FieldSpec("included_services"),
        FieldSpec(
            "destination_ids", parse=parse_id_list, aliases=("destinations",), nullable=False,
        ),
    )
    defaults = {
        "base_price": Decimal("0"),
        "duration_days": 1,
        "max_capacity": 1,
        "destination_ids": [],
    }

    def project(self, row: dict) -> dict:
        out = super().project(row)
        out["destination_ids"] = list(row.get("destination_ids") or [])
        return out

    def validate_record(self, values: dict[str, Any], existing: dict | None) -> None:
        price = values.get("base_price")
        if price is not None and price < 0:
            raise ValidationError("base_price must be >= 0", fields=["base_price"])
        for name in ("duration_days", "max_capacity"):
            value = values.get(name)
            if value is not None and value < 1:
                raise ValidationError(f"{name} must be >= 1", fields=[name])
