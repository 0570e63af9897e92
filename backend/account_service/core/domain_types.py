"""Domain Types — identity wrappers and canonical identifier parsing.

Invariants:
    - AccountId and UserId wrap UUIDs — never use bare UUID in handler logic
    - Only the canonical 8-4-4-4-12 hex form is accepted as an identifier
    - parse_user_id raises INVALID_ID before any store access

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Regex over uuid.UUID(): UUID() also accepts braces, urn: prefixes and
      unhyphenated hex, none of which are canonical
"""

import re
from typing import NewType
from uuid import UUID

from account_service.core.errors import ErrorKind, ServiceError


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", UUID)
UserId = NewType("UserId", UUID)


# ─── Identifier Format ───────────────────────────────────────────

_CANONICAL_ID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
)


def is_canonical_identifier(raw: object) -> bool:
    """True when raw is a str in canonical UUID form."""
    return isinstance(raw, str) and bool(_CANONICAL_ID.fullmatch(raw))


def parse_user_id(raw: object) -> UserId:
    """Parse a path identifier or raise INVALID_ID."""
    if not is_canonical_identifier(raw):
        raise ServiceError(ErrorKind.INVALID_ID)
    return UserId(UUID(raw))  # type: ignore[arg-type]
