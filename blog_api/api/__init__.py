"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; failures use the BlogError envelope

Design Decisions:
    - Thin routes delegate to the persistence gateway (one call per request)
"""
