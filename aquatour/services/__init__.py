"""Services Layer — uniqueness validator, referential guard, entity repositories, logs.

Invariants:
    - One repository file per entity, all built on entity_repository.EntityRepository
    - Every mutation goes through DataGateway.transaction()

Design Decisions:
    - Rules live in core/, queries live here (ADR: ExMA impureim sandwich)
"""
