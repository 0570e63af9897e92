"""Error Taxonomy — a closed set of error kinds for every account-service failure mode.

Invariants:
    - Every error carries a kind (ErrorKind), a message (str) and an optional detail
    - Status code is derived from the kind and can never be overridden
    - to_response() produces the uniform error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - One ServiceError tagged with an ErrorKind instead of a subclass per kind:
      handlers and tests match on exc.kind, not isinstance (ADR: uniform error shape)
    - StoreConflictError is raised by store adapters only; handlers translate it
      to USER_EXISTS before it can reach the envelope builder
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class KindSpec:
    """Status code and default message of a single error kind."""
    status: int
    default_message: str


class ErrorKind(str, Enum):
    """The nine closed error categories. Value is the wire-level kind name."""
    NOT_FOUND = "NotFound"
    VALIDATION = "ValidationError"
    INVALID_REQUEST = "InvalidRequest"
    USER_EXISTS = "UserExists"
    USER_NOT_FOUND = "UserNotFound"
    INVALID_PASSWORD = "InvalidPassword"
    INVALID_ID = "InvalidId"
    UNAUTHORIZED = "Unauthorized"
    INTERNAL = "Internal"

    @property
    def status(self) -> int:
        return _KIND_SPECS[self].status

    @property
    def default_message(self) -> str:
        return _KIND_SPECS[self].default_message


_KIND_SPECS: dict[ErrorKind, KindSpec] = {
    ErrorKind.NOT_FOUND: KindSpec(404, "Not Found"),
    ErrorKind.VALIDATION: KindSpec(422, "Validation Error"),
    ErrorKind.INVALID_REQUEST: KindSpec(422, "Invalid Request"),
    ErrorKind.USER_EXISTS: KindSpec(409, "User already exists"),
    ErrorKind.USER_NOT_FOUND: KindSpec(404, "User not found"),
    ErrorKind.INVALID_PASSWORD: KindSpec(401, "Invalid password"),
    ErrorKind.INVALID_ID: KindSpec(400, "Invalid User ID"),
    ErrorKind.UNAUTHORIZED: KindSpec(401, "Unauthorized: No token provided"),
    ErrorKind.INTERNAL: KindSpec(500, "Internal Server Error"),
}


class ServiceError(Exception):
    """The only exception type a request handler may let escape."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        detail: str | None = None,
    ):
        self.kind = kind
        self.message = message or kind.default_message
        self.detail = detail
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status

    def is_kind(self, kind: ErrorKind) -> bool:
        return self.kind is kind

    def to_response(self) -> dict:
        """Convert to the error envelope. `error` only appears with a detail."""
        body: dict = {"success": False, "message": self.message}
        if self.detail:
            body["error"] = self.detail
        return body

    def to_log_extra(self) -> dict:
        """Structured fields for logger.* extra=..."""
        return {"error_kind": self.kind.value, "status_code": self.status_code}

    def __repr__(self) -> str:
        return f"ServiceError({self.kind.value}, {self.message!r})"


def internal_error() -> ServiceError:
    """Generic 500 — the message never carries the underlying cause."""
    return ServiceError(ErrorKind.INTERNAL)


class StoreConflictError(Exception):
    """Store adapter signal: a uniqueness constraint rejected the write."""

    def __init__(self, field: str = "email"):
        super().__init__(f"Duplicate value for unique field '{field}'")
        self.field = field
