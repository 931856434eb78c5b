"""User Repository — verifies password hashing, role mapping and the protected superadmin."""

import pytest
from sqlalchemy import select

from aquatour.core.domain_types import EnumMappingMode
from aquatour.core.errors import ForbiddenError, ValidationError
from aquatour.models import User
from aquatour.services.user_repository import UserRepository


async def test_password_stored_as_bcrypt_and_never_projected(users, advisor, gateway):
    assert "password" not in advisor
    assert "password_digest" not in advisor
    digest = await gateway.scalar(select(User.password_digest).where(User.id == advisor["id"]))
    assert digest.startswith("$2b$")
    assert users.hasher.verify("secret123", digest)


async def test_role_stored_as_db_label(advisor, gateway):
    stored = await gateway.scalar(select(User.role).where(User.id == advisor["id"]))
    assert stored == "Asesor"
    assert advisor["role"] == "empleado"


async def test_role_defaults_to_employee(users):
    created = await users.create({
        "first_name": "Leo", "last_name": "Mar", "email": "leo@x.com", "password": "pw",
    })
    assert created["role"] == "empleado"
    assert created["is_active"] is True


async def test_gender_and_document_type_mapped(users):
    created = await users.create({
        "first_name": "Sol", "last_name": "Río", "email": "sol@x.com", "password": "pw",
        "gender": "Femenino", "documentType": "PP",
    })
    assert created["gender"] == "Femenino"
    assert created["document_type"] == "PP"


async def test_password_change_rehashes(users, advisor, gateway):
    await users.update(advisor["id"], {"password": "nuevo"})
    digest = await gateway.scalar(select(User.password_digest).where(User.id == advisor["id"]))
    assert users.hasher.verify("nuevo", digest)


async def test_superadmin_cannot_be_deleted(users):
    boss = await users.create({
        "first_name": "Root", "last_name": "Admin", "email": "root@x.com",
        "password": "pw", "role": "superadministrador",
    })
    with pytest.raises(ForbiddenError):
        await users.delete(boss["id"])
    assert await users.find_by_id(boss["id"]) is not None


async def test_check_email(users, advisor, seeded_client):
    assert await users.check_email("free@x.com") is None
    assert await users.check_email("ana@aquatour.test", exclude_id=advisor["id"]) is None
    conflict = await users.check_email("carlos@x.com", exclude_id=advisor["id"])
    assert conflict.display_name == "Client"


async def test_unknown_role_rejected_in_strict_mode(users):
    with pytest.raises(ValidationError) as exc:
        await users.create({
            "first_name": "Max", "last_name": "Paz", "email": "max@x.com",
            "password": "pw", "role": "gerente",
        })
    assert exc.value.fields == ["role"]


async def test_unknown_role_defaults_in_lenient_mode(gateway, hasher):
    lenient = UserRepository(gateway, hasher=hasher, enum_mode=EnumMappingMode.LENIENT)
    created = await lenient.create({
        "first_name": "Max", "last_name": "Paz", "email": "max@x.com",
        "password": "pw", "role": "gerente",
    })
    assert created["role"] == "empleado"


@pytest.mark.parametrize("payload, field", [
    ({"role": None}, "role"),
    ({"isActive": None}, "is_active"),
])
async def test_null_role_or_active_flag_rejected_on_update(users, advisor, payload, field):
    with pytest.raises(ValidationError) as exc:
        await users.update(advisor["id"], payload)
    assert exc.value.fields == [field]
    assert (await users.get(advisor["id"]))["role"] == "empleado"


async def test_null_role_on_create_uses_default(users):
    created = await users.create({
        "first_name": "Leo", "last_name": "Mar", "email": "leo@x.com",
        "password": "pw", "role": None, "is_active": None,
    })
    assert created["role"] == "empleado"
    assert created["is_active"] is True
