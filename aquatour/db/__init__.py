"""Database Base — declarative Base shared by every ORM model.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
"""
