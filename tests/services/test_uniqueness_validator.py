"""Uniqueness Validator — verifies cross-entity email/phone/document checks against the store.

Invariants:
    - A value held by any entity in the domain conflicts, regardless of which entity asks
    - Only the excluded row is skipped, never its whole table
    - Phone formatting differences still collide
"""

import pytest

from aquatour.core.domain_types import EntityKind, UniqueField
from aquatour.core.errors import ConflictError
from aquatour.services.uniqueness_validator import UniquenessValidator


@pytest.fixture
def validator(gateway):
    return UniquenessValidator(gateway)


async def test_free_value_has_no_conflict(validator, seeded_client):
    assert await validator.check_value_exists("new@x.com", UniqueField.EMAIL) is None


async def test_email_held_by_client_conflicts(validator, seeded_client):
    conflict = await validator.check_value_exists("carlos@x.com", UniqueField.EMAIL)
    assert conflict is not None
    assert conflict.table == "clients"
    assert conflict.entity_kind == EntityKind.CLIENT
    assert conflict.conflicting_row["id"] == seeded_client["id"]


async def test_users_are_scanned_first(validator, advisor):
    conflict = await validator.check_value_exists("ana@aquatour.test", UniqueField.EMAIL)
    assert conflict.entity_kind == EntityKind.USER


async def test_phone_formats_collide(validator, seeded_client):
    conflict = await validator.check_value_exists("573001234567", UniqueField.PHONE)
    assert conflict.entity_kind == EntityKind.CLIENT


async def test_document_formats_collide(validator, seeded_client):
    conflict = await validator.check_value_exists("CC 55-001", UniqueField.DOCUMENT)
    assert conflict.entity_kind == EntityKind.CLIENT


async def test_excluding_own_row_passes(validator, seeded_client):
    conflict = await validator.check_value_exists(
        "carlos@x.com", UniqueField.EMAIL,
        exclude_table="clients", exclude_id=seeded_client["id"],
    )
    assert conflict is None


async def test_exclusion_accepts_entity_kind(validator, seeded_client):
    conflict = await validator.check_value_exists(
        "carlos@x.com", UniqueField.EMAIL,
        exclude_table=EntityKind.CLIENT, exclude_id=seeded_client["id"],
    )
    assert conflict is None


async def test_exclusion_does_not_hide_other_tables(validator, seeded_client, contacts):
    contact = await contacts.create({
        "name": "Luz", "email": "luz@x.com", "phone": "111", "company": "ACME",
    })
    # Excluding the contact row does not skip the client holding the phone
    conflict = await validator.check_value_exists(
        "+57 300 123 4567", UniqueField.PHONE,
        exclude_table="contacts", exclude_id=contact["id"],
    )
    assert conflict.entity_kind == EntityKind.CLIENT


async def test_blank_values_are_never_checked(validator, seeded_client):
    assert await validator.check_value_exists("  ", UniqueField.EMAIL) is None
    assert await validator.check_value_exists("--", UniqueField.PHONE) is None
    assert await validator.check_value_exists(None, UniqueField.DOCUMENT) is None


async def test_validate_unique_raises_conflict_payload(validator, seeded_client):
    with pytest.raises(ConflictError) as exc:
        await validator.validate_unique("carlos@x.com", UniqueField.EMAIL)
    assert exc.value.message == "Email already registered in the system as Client"
    assert exc.value.conflict["displayName"] == "Client"
    assert exc.value.conflict["table"] == "clients"
