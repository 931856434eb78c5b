"""Integrity Rules — which dependents block a delete, and in what order they are checked.

Invariants:
    - DELETE_GUARDS order is the check order; the first non-zero count wins
    - Entities absent from DELETE_GUARDS have no application-level guard
    - Messages always name the blocking count and dependent kind

Design Decisions:
    - Kinds only, no columns: the shell maps (parent, dependent) to a foreign key
      (ADR: core never imports models)
    - Quote -> Payment guarded like Reservation -> Payment: payments can reference either
"""

from aquatour.core.domain_types import EntityKind


DELETE_GUARDS: dict[EntityKind, tuple[EntityKind, ...]] = {
    EntityKind.CLIENT: (EntityKind.QUOTE, EntityKind.RESERVATION),
    EntityKind.PACKAGE: (EntityKind.RESERVATION, EntityKind.QUOTE),
    EntityKind.RESERVATION: (EntityKind.PAYMENT,),
    EntityKind.QUOTE: (EntityKind.PAYMENT,),
}


def blocking_dependents(kind: EntityKind) -> tuple[EntityKind, ...]:
    return DELETE_GUARDS.get(kind, ())


def dependency_conflict_message(
    kind: EntityKind, dependent: EntityKind, count: int,
) -> str:
    return (
        f"Cannot delete {kind.label} because it has {count} associated "
        f"{dependent.label}(s). Remove them first."
    )
