"""Core Layer — error types, identity types and boundary protocols. No IO, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/

Design Decisions:
    - Routes and gateway meet at repository_protocols.BlogGateway (ADR: thin routes)
"""
