"""Boundary Protocols — contracts between repositories and their collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Repositories depend on these Protocols, never on concrete recorder/hasher classes
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - AuditRecorder.record never raises: a failed audit write must not fail the mutation
"""

from typing import Any, Protocol

from aquatour.core.domain_types import Actor, EntityKind


class AuditRecorder(Protocol):
    """Receives one event per successful mutation — implemented by shell."""
    async def record(
        self,
        actor: Actor | None,
        action: str,
        entity_kind: EntityKind,
        entity_id: int | None,
        entity_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None: ...


class PasswordHasher(Protocol):
    """One-way password digests — implemented by shell."""
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, digest: str | None) -> bool: ...
