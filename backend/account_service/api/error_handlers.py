"""Error Handlers — global exception handlers that render the error envelope.

Invariants:
    - ServiceError → envelope with the kind's status code
    - RequestValidationError (query/path params) → INVALID_REQUEST (422)
    - HTTPException 404 (unknown route) → NOT_FOUND; other HTTP errors keep their status
    - Exception (catch-all) → INTERNAL (500), never leaks internal details

Design Decisions:
    - Final status/message resolution happens only here and in core/envelope.py
    - Domain failures logged at WARNING: they are expected outcomes, not faults
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from account_service.core.envelope import render_error
from account_service.core.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_service_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _envelope_response(exc: BaseException) -> JSONResponse:
    status_code, body = render_error(exc)
    return JSONResponse(status_code=status_code, content=body)


def _register_service_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Handle all taxonomy errors raised by request handlers."""
        log = logger.error if exc.is_kind(ErrorKind.INTERNAL) else logger.warning
        log(
            f"ServiceError: {exc.message}",
            extra={**exc.to_log_extra(), "path": request.url.path},
        )
        return _envelope_response(exc)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle FastAPI parameter validation errors (first violation only)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        errors = exc.errors()
        if errors:
            field = ".".join(str(loc) for loc in errors[0]["loc"])
            message = f"Invalid data: {field}: {errors[0]['msg']}"
        else:
            field, message = None, None
        return _envelope_response(
            ServiceError(ErrorKind.INVALID_REQUEST, message, detail=field),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Handle routing-level HTTP errors (unknown path, wrong method)."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _envelope_response(ServiceError(ErrorKind.NOT_FOUND))
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=render_error(exc)[1],
        )
