"""Integrity Rules — verifies which dependents block deletes and in what order."""

from aquatour.core.domain_types import EntityKind
from aquatour.core.integrity_rules import (
    DELETE_GUARDS, blocking_dependents, dependency_conflict_message,
)


def test_client_checks_quotes_before_reservations():
    assert blocking_dependents(EntityKind.CLIENT) == (
        EntityKind.QUOTE, EntityKind.RESERVATION,
    )


def test_package_checks_reservations_before_quotes():
    assert blocking_dependents(EntityKind.PACKAGE) == (
        EntityKind.RESERVATION, EntityKind.QUOTE,
    )


def test_reservation_and_quote_blocked_by_payments():
    assert blocking_dependents(EntityKind.RESERVATION) == (EntityKind.PAYMENT,)
    assert blocking_dependents(EntityKind.QUOTE) == (EntityKind.PAYMENT,)


def test_unguarded_kinds_have_no_dependents():
    for kind in (EntityKind.USER, EntityKind.PROVIDER, EntityKind.CONTACT,
                 EntityKind.DESTINATION, EntityKind.PAYMENT):
        assert kind not in DELETE_GUARDS
        assert blocking_dependents(kind) == ()


def test_message_names_count_and_dependent():
    message = dependency_conflict_message(EntityKind.CLIENT, EntityKind.QUOTE, 2)
    assert message == (
        "Cannot delete client because it has 2 associated quote(s). Remove them first."
    )
