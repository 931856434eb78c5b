"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {"ok": ...} JSON envelope

Design Decisions:
    - Thin routes delegate to repositories (ADR: ExMA impureim sandwich)
"""
