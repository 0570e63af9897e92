"""Boundary Protocols — the persistence contract the request core consumes.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Records cross the boundary as plain dicts (id as str, timestamps ISO-8601)
    - User projections never contain "password"; account lookups carry
      "password_hash" for verification only
    - Each method is atomic for a single record; no cross-record transactions
    - create_* / update_* raise StoreConflictError on a uniqueness violation

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - UserFilter is a frozen dataclass so list queries stay declarative
      (no arbitrary query fragments cross the boundary)
"""

from dataclasses import dataclass
from typing import Protocol

from account_service.core.domain_types import UserId

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class UserFilter:
    """Optional exact-match filters and a page window for listing users."""
    email: str | None = None
    username: str | None = None
    offset: int = 0
    limit: int = MAX_PAGE_SIZE

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError("offset must be >= 0")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}")


class AccountStore(Protocol):
    """Contract for account and user-record persistence — implemented by shell."""
    async def find_account_by_email(self, email: str) -> dict | None: ...
    async def create_account(self, fields: dict) -> dict: ...
    async def find_user_by_id(self, user_id: UserId) -> dict | None: ...
    async def find_all_users(
        self, user_filter: UserFilter | None = None,
    ) -> list[dict]: ...
    async def find_user_by_email(self, email: str) -> dict | None: ...
    async def create_user(self, fields: dict) -> dict: ...
    async def update_user_by_id(
        self, user_id: UserId, patch: dict,
    ) -> dict | None: ...
    async def delete_user_by_id(self, user_id: UserId) -> dict | None: ...
