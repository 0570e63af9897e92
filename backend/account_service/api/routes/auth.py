"""Auth Routes — account signup and login.

Invariants:
    - Body is read raw; validation belongs to the handler pipeline
    - Neither route requires a bearer token

Design Decisions:
    - Paths mirror the existing frontend contract (/signup, /login)
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from account_service.api.dependencies import get_account_handlers, read_json_body
from account_service.api.routes._render import respond
from account_service.schemas.envelope import (
    SuccessEnvelope, TokenOut, UserOut, error_responses,
)
from account_service.services.handle_accounts import AccountHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["auth"])


@router.post(
    "/signup",
    responses={
        200: {"model": SuccessEnvelope[UserOut]},
        **error_responses(409, 422, 500),
    },
)
async def signup(
    payload: Any = Depends(read_json_body),
    handlers: AccountHandlers = Depends(get_account_handlers),
):
    """Register a new account."""
    return respond(await handlers.signup(payload))


@router.post(
    "/login",
    responses={
        200: {"model": SuccessEnvelope[TokenOut]},
        **error_responses(401, 404, 422, 500),
    },
)
async def login(
    payload: Any = Depends(read_json_body),
    handlers: AccountHandlers = Depends(get_account_handlers),
):
    """Exchange email + password for a bearer token valid one hour."""
    return respond(await handlers.login(payload))
