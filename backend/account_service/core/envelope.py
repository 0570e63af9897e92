"""Response Envelope Builder — renders handler results and errors into the wire shape.

Invariants:
    - Success: {"success": true, "message": str, "data"?: T}
    - Error:   {"success": false, "message": str, "error"?: str}
    - Only ServiceError resolves to a non-500 status; anything else renders as INTERNAL
    - Password fields never leave through an envelope (strip_secrets)

Design Decisions:
    - HandlerResult is a plain dataclass: handlers stay transport-agnostic,
      routes turn it into a JSONResponse (ADR: thin routes)
"""

from dataclasses import dataclass, field
from typing import Any

from account_service.core.errors import ServiceError, internal_error

SECRET_FIELDS = frozenset({"password", "password_hash"})

_NO_DATA = object()


@dataclass(frozen=True)
class HandlerResult:
    """Outcome of a successful handler run."""
    status_code: int
    message: str
    data: Any = field(default=_NO_DATA)

    @property
    def has_data(self) -> bool:
        return self.data is not _NO_DATA


def strip_secrets(record: dict | None) -> dict | None:
    """Copy of record without password material."""
    if record is None:
        return None
    return {k: v for k, v in record.items() if k not in SECRET_FIELDS}


def success_envelope(message: str, data: Any = _NO_DATA) -> dict:
    body: dict = {"success": True, "message": message}
    if data is not _NO_DATA:
        body["data"] = data
    return body


def render_result(result: HandlerResult) -> tuple[int, dict]:
    """(status, body) for a successful handler run."""
    if not result.has_data:
        return result.status_code, success_envelope(result.message)
    return result.status_code, success_envelope(result.message, result.data)


def render_error(exc: BaseException) -> tuple[int, dict]:
    """(status, body) for any exception — unknown ones become INTERNAL."""
    if not isinstance(exc, ServiceError):
        exc = internal_error()
    return exc.status_code, exc.to_response()
