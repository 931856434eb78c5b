"""Route Modules — one file per resource/concern.

Invariants:
    - Each module exposes one APIRouter with prefix and tags (entity modules build it via crud.py)
    - Routes never contain business logic (delegate to repositories/services)

Design Decisions:
    - Explicit registration in main.py over auto-discovery (ADR: ExMA anti-pattern)
"""
