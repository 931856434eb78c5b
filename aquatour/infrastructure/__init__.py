"""Infrastructure Layer — database access, hashing, rate limiting, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All store exceptions are mapped to core/errors.py types here

Design Decisions:
    - Thin wrappers over SQLAlchemy, bcrypt and slowapi (ADR: ExMA single responsibility)
"""
