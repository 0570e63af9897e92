"""Fake Account Store — in-memory AccountStore that records every call.

Invariants:
    - Behaves like SqlAccountStore: dict records, ids as str, no password in user views
    - calls lists (method_name, args) in order — tests assert zero store access with it
    - unique emails enforced: create/update raise StoreConflictError like the DB constraint

Design Decisions:
    - Flat class (no inheritance from the Protocol): structural typing is enough
    - skip_precheck flag simulates a concurrent writer that slips past find_*_by_email
"""

import uuid
from datetime import datetime, timezone

from account_service.core.errors import StoreConflictError
from account_service.core.repository_protocols import UserFilter


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class FakeAccountStore:
    """In-memory store with call recording."""

    def __init__(self):
        self.accounts: dict[str, dict] = {}
        self.users: dict[str, dict] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.skip_precheck = False
        self.fail_with: Exception | None = None

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    @property
    def write_calls(self) -> list[str]:
        return [
            n for n in self.call_names
            if n.startswith(("create_", "update_", "delete_"))
        ]

    @staticmethod
    def _public(user: dict) -> dict:
        return {k: v for k, v in user.items() if k != "password"}

    # ─── Accounts ────────────────────────────────────────────────

    async def find_account_by_email(self, email):
        self._record("find_account_by_email", email)
        if self.skip_precheck:
            return None
        for account in self.accounts.values():
            if account["email"] == email:
                return dict(account)
        return None

    async def create_account(self, fields):
        self._record("create_account", fields)
        if any(a["email"] == fields["email"] for a in self.accounts.values()):
            raise StoreConflictError("email")
        account = {"id": str(uuid.uuid4()), **fields, "created_at": _now()}
        self.accounts[account["id"]] = account
        return dict(account)

    # ─── User records ────────────────────────────────────────────

    async def find_user_by_id(self, user_id):
        self._record("find_user_by_id", user_id)
        user = self.users.get(str(user_id))
        return self._public(user) if user else None

    async def find_all_users(self, user_filter=None):
        self._record("find_all_users", user_filter)
        user_filter = user_filter or UserFilter()
        users = [
            u for u in self.users.values()
            if (not user_filter.email or u["email"] == user_filter.email)
            and (not user_filter.username or u["username"] == user_filter.username)
        ]
        window = users[user_filter.offset:user_filter.offset + user_filter.limit]
        return [self._public(u) for u in window]

    async def find_user_by_email(self, email):
        self._record("find_user_by_email", email)
        if self.skip_precheck:
            return None
        for user in self.users.values():
            if user["email"] == email:
                return self._public(user)
        return None

    async def create_user(self, fields):
        self._record("create_user", fields)
        if any(u["email"] == fields["email"] for u in self.users.values()):
            raise StoreConflictError("email")
        now = _now()
        user = {
            "id": str(uuid.uuid4()), **fields,
            "created_at": now, "updated_at": now,
        }
        self.users[user["id"]] = user
        return self._public(user)

    async def update_user_by_id(self, user_id, patch):
        self._record("update_user_by_id", user_id, patch)
        user = self.users.get(str(user_id))
        if user is None:
            return None
        if "email" in patch and any(
            u["email"] == patch["email"] and uid != str(user_id)
            for uid, u in self.users.items()
        ):
            raise StoreConflictError("email")
        user.update(patch)
        user["updated_at"] = _now()
        return self._public(user)

    async def delete_user_by_id(self, user_id):
        self._record("delete_user_by_id", user_id)
        user = self.users.pop(str(user_id), None)
        return self._public(user) if user else None

    # ─── Seeding (not recorded) ──────────────────────────────────

    def seed_user(self, **fields) -> dict:
        now = _now()
        user = {
            "id": str(uuid.uuid4()),
            "username": "seeded",
            "email": "seeded@mail.com",
            "phone": "5551234567",
            "password": "hashed",
            "created_at": now,
            "updated_at": now,
            **fields,
        }
        self.users[user["id"]] = user
        return user
