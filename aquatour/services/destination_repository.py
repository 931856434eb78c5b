"""Destination Repository — cities with an optional supplying provider."""

from aquatour.core.coercion import parse_decimal, parse_int
from aquatour.core.domain_types import EntityKind
from aquatour.core.field_aliases import FieldSpec
from aquatour.models import Destination, Provider
from aquatour.services.entity_repository import EntityRepository


class DestinationRepository(EntityRepository):
    kind = EntityKind.DESTINATION
    model = Destination
    fields = (
        FieldSpec("city", required=True),
        FieldSpec("country", required=True),
        FieldSpec("description"),
        FieldSpec("average_climate", aliases=("climate",)),
        FieldSpec("high_season"),
        FieldSpec("main_language", aliases=("language",)),
        FieldSpec("currency"),
        FieldSpec("base_price", parse=parse_decimal),
        FieldSpec("provider_id", parse=parse_int),
    )
    references = {"provider_id": Provider}

    def order_by(self) -> tuple:
        return (Destination.country, Destination.city, Destination.id)

    def display_name(self, record: dict) -> str | None:
        return f"{record.get('city')}, {record.get('country')}"
