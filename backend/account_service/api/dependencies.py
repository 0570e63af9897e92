"""Request Dependencies — wires store, credentials and handlers per request.

Invariants:
    - One SqlAccountStore per request, bound to the request's AsyncSession
    - bearer_token never raises: absence is reported by the handler as UNAUTHORIZED,
      after the identifier check
    - read_json_body never raises: an unparsable body becomes None and fails validation

Design Decisions:
    - HTTPBearer(auto_error=False): the token check belongs to the handler pipeline,
      so its position relative to the id check is controlled there
"""

from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.config import Settings, get_settings
from account_service.infrastructure.database import get_db
from account_service.infrastructure.sql_store import SqlAccountStore
from account_service.services.credentials import CredentialService
from account_service.services.handle_accounts import AccountHandlers
from account_service.services.handle_users import UserHandlers

_bearer = HTTPBearer(auto_error=False)


async def bearer_token(request: Request) -> str | None:
    """Token from `Authorization: Bearer <token>`, or None."""
    credentials: HTTPAuthorizationCredentials | None = await _bearer(request)
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials


async def read_json_body(request: Request) -> Any:
    """Parsed JSON body, or None when the body is empty or not JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


def get_credentials(settings: Settings = Depends(get_settings)) -> CredentialService:
    return CredentialService.from_settings(settings)


def get_store(db: AsyncSession = Depends(get_db)) -> SqlAccountStore:
    return SqlAccountStore(db)


def get_account_handlers(
    store: SqlAccountStore = Depends(get_store),
    credentials: CredentialService = Depends(get_credentials),
) -> AccountHandlers:
    return AccountHandlers(store, credentials)


def get_user_handlers(
    store: SqlAccountStore = Depends(get_store),
    credentials: CredentialService = Depends(get_credentials),
) -> UserHandlers:
    return UserHandlers(store, credentials)
