"""Account Handlers — signup and login.

Invariants:
    - Validation runs before any store access; a violation never writes
    - signup: duplicate email → USER_EXISTS, whether caught by the pre-check or by the store
    - login: unknown email → USER_NOT_FOUND; wrong password → INVALID_PASSWORD
    - The account returned by signup never contains password material

Design Decisions:
    - The email pre-check is a fast friendly error; the store's unique
      constraint is the actual guarantee (StoreConflictError → USER_EXISTS)
    - Login validation failures are INVALID_REQUEST, signup's are VALIDATION
"""

import logging

from account_service.core.envelope import HandlerResult, strip_secrets
from account_service.core.errors import ErrorKind, ServiceError, StoreConflictError
from account_service.core.repository_protocols import AccountStore
from account_service.core.validation_rules import (
    LoginPayload,
    SignupPayload,
    validate_payload,
)
from account_service.services.credentials import CredentialService
from account_service.services.handler_guard import guarded

logger = logging.getLogger(__name__)


class AccountHandlers:
    """Registration and authentication of accounts."""

    def __init__(self, store: AccountStore, credentials: CredentialService):
        self.store = store
        self.credentials = credentials

    @guarded("signup")
    async def signup(self, payload: object) -> HandlerResult:
        """Register a new account and return it without its password hash."""
        body = validate_payload(SignupPayload, payload)

        if await self.store.find_account_by_email(body.email):
            raise ServiceError(ErrorKind.USER_EXISTS)

        password_hash = await self.credentials.hash_password(body.password)
        try:
            account = await self.store.create_account({
                "username": body.username,
                "email": body.email,
                "phone": body.phone,
                "password_hash": password_hash,
            })
        except StoreConflictError:
            raise ServiceError(ErrorKind.USER_EXISTS) from None

        logger.info("Account registered", extra={"account_id": account["id"]})
        return HandlerResult(200, "Signup successful", strip_secrets(account))

    @guarded("login")
    async def login(self, payload: object) -> HandlerResult:
        """Verify credentials and issue a bearer token."""
        body = validate_payload(
            LoginPayload, payload,
            kind=ErrorKind.INVALID_REQUEST, prefix="Invalid data",
        )

        account = await self.store.find_account_by_email(body.email)
        if not account:
            raise ServiceError(ErrorKind.USER_NOT_FOUND)

        if not await self.credentials.verify_password(
            body.password, account["password_hash"],
        ):
            raise ServiceError(ErrorKind.INVALID_PASSWORD)

        token = self.credentials.issue_token(account["id"], account["email"])
        logger.info("Login succeeded", extra={"account_id": account["id"]})
        return HandlerResult(200, "Login successful", {"token": token})
