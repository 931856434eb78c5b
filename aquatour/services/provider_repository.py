"""Provider Repository — providers share the global email/phone uniqueness domain."""

from aquatour.core.domain_types import EntityKind, UniqueField
from aquatour.core.field_aliases import FieldSpec
from aquatour.models import Provider
from aquatour.services.entity_repository import EntityRepository


class ProviderRepository(EntityRepository):
    kind = EntityKind.PROVIDER
    model = Provider
    fields = (
        FieldSpec("name", required=True),
        FieldSpec("provider_type", required=True, aliases=("type",)),
        FieldSpec("phone", required=True),
        FieldSpec("email", required=True),
        FieldSpec("status", nullable=False),
    )
    unique_fields = (
        (UniqueField.EMAIL, "email"),
        (UniqueField.PHONE, "phone"),
    )
    read_only_columns = ("created_at",)
    defaults = {"status": "activo"}

    def order_by(self) -> tuple:
        return (Provider.name, Provider.id)
