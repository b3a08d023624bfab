"""Infrastructure Layer — database session management, persistence gateway, logging.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - All store calls wrapped with timeout and error mapping
"""
