"""Validation Rules — declarative payload schemas and first-violation extraction.

Invariants:
    - Four schemas: signup, login, create, update — unknown keys are violations
    - validate_payload reports ONLY the first violation (field + message)
    - Validation is pure: no IO, no store access, no side effects
    - Update: every field optional; an explicit null counts as "not provided"
    - Passwords fit the hash input: at most 72 bytes once UTF-8 encoded

Design Decisions:
    - Pydantic models over hand-written checks: constraints live next to the
      field declaration, errors come back in declaration order
    - Raw body (possibly None or a list) validated here rather than by FastAPI,
      so id and token checks can run first in the handler pipeline
"""

from typing import Annotated, Any, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    ValidationError,
    model_validator,
)

from account_service.core.errors import ErrorKind, ServiceError

PHONE_PATTERN = r"^[0-9]{10}$"
MAX_PASSWORD_BYTES = 72

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _fits_hash_input(value: str) -> str:
    # bcrypt reads at most 72 bytes; counted after encoding, not in characters
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
    return value


Password = Annotated[str, StringConstraints(min_length=6), AfterValidator(_fits_hash_input)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SignupPayload(_Payload):
    """Account registration — all fields required."""
    username: str = Field(min_length=5, max_length=30)
    email: EmailStr
    phone: str = Field(pattern=PHONE_PATTERN)
    password: Password


class LoginPayload(_Payload):
    """Credentials for token issuance."""
    email: EmailStr
    password: str = Field(min_length=1)


class CreateUserPayload(_Payload):
    """Managed user record creation — all fields required."""
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    phone: str = Field(pattern=PHONE_PATTERN)
    password: Password


class UpdateUserPayload(_Payload):
    """Partial update — same constraints as create, nothing required."""
    username: str | None = Field(None, min_length=3, max_length=30)
    email: EmailStr | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    password: Password | None = None

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def patch(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


def first_violation(exc: ValidationError) -> tuple[str, str]:
    """(field, message) of the first reported error."""
    error = exc.errors()[0]
    field = ".".join(str(loc) for loc in error["loc"]) or "payload"
    return field, error["msg"]


def validate_payload(
    schema: type[SchemaT],
    raw: Any,
    kind: ErrorKind = ErrorKind.VALIDATION,
    prefix: str = "Validation error",
) -> SchemaT:
    """Run schema over raw input or raise ServiceError(kind) naming the first violation."""
    try:
        return schema.model_validate(raw)
    except ValidationError as exc:
        field, message = first_violation(exc)
        raise ServiceError(kind, f"{prefix}: {field}: {message}", detail=field) from None
