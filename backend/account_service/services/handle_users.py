"""User Record Handlers — list, get, create, update, delete.

Invariants:
    - Order for mutations: identifier → bearer token → validation → store
    - A malformed identifier or missing/invalid token never reaches the store
    - Responses never include the password field
    - An empty list is a success unless the caller asks for require_results
    - Passwords are stored as bcrypt hashes, on create and on update

Design Decisions:
    - Token verification is local (JWT) so it runs before validation and IO
    - Store conflicts on create/update map to USER_EXISTS, like the email pre-check
"""

import logging

from account_service.core.domain_types import parse_user_id
from account_service.core.envelope import HandlerResult, strip_secrets
from account_service.core.errors import ErrorKind, ServiceError, StoreConflictError
from account_service.core.repository_protocols import AccountStore, UserFilter
from account_service.core.validation_rules import (
    CreateUserPayload,
    UpdateUserPayload,
    validate_payload,
)
from account_service.services.credentials import CredentialService
from account_service.services.handler_guard import guarded

logger = logging.getLogger(__name__)

RETRIEVED = "Data retrieved successfully"


class UserHandlers:
    """CRUD over managed user records."""

    def __init__(self, store: AccountStore, credentials: CredentialService):
        self.store = store
        self.credentials = credentials

    @guarded("list_users")
    async def list_users(
        self,
        user_filter: UserFilter | None = None,
        *,
        require_results: bool = False,
    ) -> HandlerResult:
        """List users; empty is success unless require_results is set."""
        users = await self.store.find_all_users(user_filter)
        if require_results and not users:
            raise ServiceError(ErrorKind.NOT_FOUND, "User not found")
        return HandlerResult(200, RETRIEVED, [strip_secrets(u) for u in users])

    @guarded("get_user")
    async def get_user(self, raw_id: object) -> HandlerResult:
        user_id = parse_user_id(raw_id)
        user = await self.store.find_user_by_id(user_id)
        if not user:
            raise ServiceError(ErrorKind.USER_NOT_FOUND)
        return HandlerResult(200, RETRIEVED, strip_secrets(user))

    @guarded("create_user")
    async def create_user(self, token: str | None, payload: object) -> HandlerResult:
        """Create a user record on behalf of an authenticated caller."""
        claims = self.credentials.verify_token(token)
        body = validate_payload(CreateUserPayload, payload)

        if await self.store.find_user_by_email(body.email):
            raise ServiceError(ErrorKind.USER_EXISTS)

        fields = body.model_dump()
        fields["password"] = await self.credentials.hash_password(body.password)
        try:
            user = await self.store.create_user(fields)
        except StoreConflictError:
            raise ServiceError(ErrorKind.USER_EXISTS) from None

        logger.info(
            "User record created",
            extra={"account_id": str(claims.account_id), "user_id": user["id"]},
        )
        return HandlerResult(201, "User saved successfully", strip_secrets(user))

    @guarded("update_user")
    async def update_user(
        self, raw_id: object, token: str | None, payload: object,
    ) -> HandlerResult:
        """Apply a partial update; fields not sent stay unchanged."""
        user_id = parse_user_id(raw_id)
        claims = self.credentials.verify_token(token)
        patch = validate_payload(UpdateUserPayload, payload).patch()

        if "password" in patch:
            patch["password"] = await self.credentials.hash_password(patch["password"])
        try:
            user = await self.store.update_user_by_id(user_id, patch)
        except StoreConflictError:
            raise ServiceError(ErrorKind.USER_EXISTS) from None
        if not user:
            raise ServiceError(ErrorKind.USER_NOT_FOUND)

        logger.info(
            "User record updated",
            extra={"account_id": str(claims.account_id), "user_id": user["id"]},
        )
        return HandlerResult(200, "Data updated successfully", strip_secrets(user))

    @guarded("delete_user")
    async def delete_user(self, raw_id: object, token: str | None) -> HandlerResult:
        user_id = parse_user_id(raw_id)
        claims = self.credentials.verify_token(token)

        user = await self.store.delete_user_by_id(user_id)
        if not user:
            raise ServiceError(ErrorKind.USER_NOT_FOUND)

        logger.info(
            "User record deleted",
            extra={"account_id": str(claims.account_id), "user_id": user["id"]},
        )
        return HandlerResult(200, "Data deleted successfully", strip_secrets(user))
