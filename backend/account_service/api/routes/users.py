"""User Routes — list, get, create, update and delete managed user records.

Invariants:
    - /user/get is declared before /user/{user_id} so it is never read as an id
    - Path ids are passed through as raw strings; the handler owns format checks
    - Mutations take the bearer token via dependency but never reject in the route
    - page (1-based) takes precedence over offset: offset = (page - 1) * limit

Design Decisions:
    - Paths mirror the existing frontend contract (/user, /user/get,
      /user/update/{id}, /user/delete/{id})
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from account_service.api.dependencies import (
    bearer_token, get_user_handlers, read_json_body,
)
from account_service.api.routes._render import respond
from account_service.core.repository_protocols import MAX_PAGE_SIZE, UserFilter
from account_service.schemas.envelope import (
    SuccessEnvelope, UserOut, error_responses,
)
from account_service.services.handle_users import UserHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/user", tags=["users"])


@router.get(
    "/get",
    responses={
        200: {"model": SuccessEnvelope[list[UserOut]]},
        **error_responses(404, 422, 500),
    },
)
async def list_users(
    email: str | None = Query(None, max_length=320),
    username: str | None = Query(None, max_length=30),
    offset: int = Query(0, ge=0),
    limit: int = Query(MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    page: int | None = Query(None, ge=1),
    require_results: bool = Query(False),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """List user records, optionally filtered and paged."""
    if page is not None:
        offset = (page - 1) * limit
    user_filter = UserFilter(
        email=email, username=username, offset=offset, limit=limit,
    )
    return respond(
        await handlers.list_users(user_filter, require_results=require_results),
    )


@router.get(
    "/{user_id}",
    responses={
        200: {"model": SuccessEnvelope[UserOut]},
        **error_responses(400, 404, 500),
    },
)
async def get_user(
    user_id: str, handlers: UserHandlers = Depends(get_user_handlers),
):
    """Fetch one user record by id."""
    return respond(await handlers.get_user(user_id))


@router.post(
    "",
    responses={
        201: {"model": SuccessEnvelope[UserOut]},
        **error_responses(401, 409, 422, 500),
    },
)
async def create_user(
    payload: Any = Depends(read_json_body),
    token: str | None = Depends(bearer_token),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Create a user record (bearer token required)."""
    return respond(await handlers.create_user(token, payload))


@router.put(
    "/update/{user_id}",
    responses={
        200: {"model": SuccessEnvelope[UserOut]},
        **error_responses(400, 401, 404, 409, 422, 500),
    },
)
async def update_user(
    user_id: str,
    payload: Any = Depends(read_json_body),
    token: str | None = Depends(bearer_token),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Partially update a user record (bearer token required)."""
    return respond(await handlers.update_user(user_id, token, payload))


@router.delete(
    "/delete/{user_id}",
    responses={
        200: {"model": SuccessEnvelope[UserOut]},
        **error_responses(400, 401, 404, 500),
    },
)
async def delete_user(
    user_id: str,
    token: str | None = Depends(bearer_token),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Delete a user record (bearer token required)."""
    return respond(await handlers.delete_user(user_id, token))
