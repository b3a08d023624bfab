"""Database Metadata — declarative Base shared by the ORM models and Alembic.

Invariants:
    - Engines and sessions live in infrastructure/database.py, never here
"""
