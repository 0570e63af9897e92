"""Services Layer — credential service and request handlers.

Invariants:
    - Handlers receive collaborators through their constructor (no singletons)
    - Every handler method returns HandlerResult or raises ServiceError

Design Decisions:
    - One handler class per resource for locality (accounts vs. user records)
"""
