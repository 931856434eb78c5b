"""API Schemas — Pydantic request bodies for the non-entity endpoints.

Invariants:
    - Entity CRUD payloads are NOT modelled here: repositories resolve their field aliases
"""
