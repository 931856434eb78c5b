"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or models/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: uniqueness and delete rules
      are decided here, queried in services/
"""
