"""Envelope Schemas — OpenAPI documentation of the wire shapes.

Invariants:
    - Mirrors core/envelope.py exactly; routes build dicts, these only document them
    - UserOut has no password field
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class UserOut(BaseModel):
    """Public user record / account view."""
    id: str
    username: str
    email: str
    phone: str
    created_at: str
    updated_at: str | None = None


class TokenOut(BaseModel):
    token: str


class SuccessEnvelope(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T | None = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    error: str | None = None


def error_responses(*status_codes: int) -> dict:
    """`responses=` mapping documenting the error envelope for each code."""
    return {code: {"model": ErrorEnvelope} for code in status_codes}
