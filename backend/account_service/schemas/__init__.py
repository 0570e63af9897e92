"""Pydantic Schemas — response contracts for OpenAPI documentation.

Invariants:
    - Schemas describe the envelope at the system boundary
    - Request payload rules live in core/validation_rules.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
