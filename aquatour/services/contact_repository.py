"""Contact Repository — contacts share the global email/phone uniqueness domain."""

from aquatour.core.domain_types import EntityKind, UniqueField
from aquatour.core.field_aliases import FieldSpec
from aquatour.models import Contact
from aquatour.services.entity_repository import EntityRepository


class ContactRepository(EntityRepository):
    kind = EntityKind.CONTACT
    model = Contact
    fields = (
        FieldSpec("name", required=True),
        FieldSpec("email", required=True),
        FieldSpec("phone", required=True),
        FieldSpec("company", required=True),
    )
    unique_fields = (
        (UniqueField.EMAIL, "email"),
        (UniqueField.PHONE, "phone"),
    )
    read_only_columns = ("created_at", "updated_at")
