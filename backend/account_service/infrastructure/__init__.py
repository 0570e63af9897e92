"""Infrastructure Layer — database session management, store adapter, logging.

Invariants:
    - Infrastructure implements core protocols, never the reverse
    - Driver errors are mapped before they reach a handler

Design Decisions:
    - Store adapter lives next to the session manager it depends on
"""
