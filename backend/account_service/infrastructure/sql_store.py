"""SQL Account Store — SQLAlchemy implementation of the AccountStore protocol.

Invariants:
    - Every mutating method commits its own single-record transaction
    - IntegrityError on insert/update → rollback + StoreConflictError
    - find_all_users selects only public columns (password never loaded)
    - Account lookups include password_hash; user lookups never include password

Design Decisions:
    - Adapter wraps one AsyncSession (request-scoped via get_db)
    - Results returned as dicts so the core never touches ORM instances
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.domain_types import UserId
from account_service.core.errors import StoreConflictError
from account_service.core.repository_protocols import UserFilter
from account_service.models.account import Account
from account_service.models.user_record import UserRecord

logger = logging.getLogger(__name__)

_PUBLIC_USER_COLUMNS = (
    UserRecord.id,
    UserRecord.username,
    UserRecord.email,
    UserRecord.phone,
    UserRecord.created_at,
    UserRecord.updated_at,
)

_USER_FIELDS = frozenset({"username", "email", "phone", "password"})


def _public_row(row) -> dict:
    data = dict(row._mapping)
    data["id"] = str(data["id"])
    data["created_at"] = data["created_at"].isoformat()
    data["updated_at"] = data["updated_at"].isoformat()
    return data


class SqlAccountStore:
    """AccountStore backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Accounts ────────────────────────────────────────────────

    async def find_account_by_email(self, email: str) -> dict | None:
        result = await self.db.execute(
            select(Account).where(Account.email == email),
        )
        account = result.scalar_one_or_none()
        return account.to_dict(include_secret=True) if account else None

    async def create_account(self, fields: dict) -> dict:
        account = Account(
            username=fields["username"],
            email=fields["email"],
            phone=fields["phone"],
            password_hash=fields["password_hash"],
        )
        self.db.add(account)
        await self._commit_or_conflict()
        return account.to_dict(include_secret=True)

    # ─── User records ────────────────────────────────────────────

    async def find_user_by_id(self, user_id: UserId) -> dict | None:
        user = await self.db.get(UserRecord, user_id)
        return user.to_dict() if user else None

    async def find_all_users(
        self, user_filter: UserFilter | None = None,
    ) -> list[dict]:
        user_filter = user_filter or UserFilter()
        query = select(*_PUBLIC_USER_COLUMNS).order_by(
            UserRecord.created_at, UserRecord.id,
        )
        if user_filter.email:
            query = query.where(UserRecord.email == user_filter.email)
        if user_filter.username:
            query = query.where(UserRecord.username == user_filter.username)
        query = query.offset(user_filter.offset).limit(user_filter.limit)

        result = await self.db.execute(query)
        return [_public_row(row) for row in result.all()]

    async def find_user_by_email(self, email: str) -> dict | None:
        result = await self.db.execute(
            select(UserRecord).where(UserRecord.email == email),
        )
        user = result.scalar_one_or_none()
        return user.to_dict() if user else None

    async def create_user(self, fields: dict) -> dict:
        user = UserRecord(**{k: fields[k] for k in _USER_FIELDS})
        self.db.add(user)
        await self._commit_or_conflict()
        return user.to_dict()

    async def update_user_by_id(
        self, user_id: UserId, patch: dict,
    ) -> dict | None:
        user = await self.db.get(UserRecord, user_id)
        if not user:
            return None
        for key, value in patch.items():
            if key in _USER_FIELDS:
                setattr(user, key, value)
        user.updated_at = datetime.now(timezone.utc)
        await self._commit_or_conflict()
        return user.to_dict()

    async def delete_user_by_id(self, user_id: UserId) -> dict | None:
        user = await self.db.get(UserRecord, user_id)
        if not user:
            return None
        snapshot = user.to_dict()
        await self.db.delete(user)
        await self.db.commit()
        return snapshot

    async def _commit_or_conflict(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Uniqueness constraint rejected write: {e.orig}")
            raise StoreConflictError("email") from None
