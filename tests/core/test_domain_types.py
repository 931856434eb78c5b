"""Domain Types — verifies entity vocabulary, actor categories and conflict payloads."""

from aquatour.core.domain_types import (
    Actor, AuditCategory, Conflict, EntityKind, Role,
)


def test_entity_kind_labels():
    assert EntityKind.CLIENT.display_name == "Client"
    assert EntityKind.CLIENT.label == "client"
    assert EntityKind.PACKAGE.value == "Package"


def test_roles_are_wire_values():
    assert {r.value for r in Role} == {"superadministrador", "administrador", "empleado"}


def test_actor_category_by_role():
    assert Actor(role="superadministrador").category == AuditCategory.ADMINISTRATOR
    assert Actor(role="administrador").category == AuditCategory.ADMINISTRATOR
    assert Actor(role="empleado").category == AuditCategory.ADVISOR
    assert Actor().category == AuditCategory.ADVISOR


def test_only_superadmin_is_superadmin():
    assert Actor(role="superadministrador").is_superadmin
    assert not Actor(role="administrador").is_superadmin


def test_conflict_to_dict():
    conflict = Conflict(
        table="clients", entity_kind=EntityKind.CLIENT,
        conflicting_row={"id": 3, "email": "a@x.com"},
    )
    assert conflict.to_dict() == {
        "table": "clients",
        "entity": "client",
        "displayName": "Client",
        "data": {"id": 3, "email": "a@x.com"},
    }
