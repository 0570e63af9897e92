"""Structured Logging — account-operation context, secret redaction, JSON output.

Invariants:
    - All logs include timestamp, level, service, logger name, and message
    - Records emitted while a guarded handler runs carry its operation name
      (signup, login, create_user, ...) even when the emitting module never saw it
    - Bearer tokens and JWT-shaped strings in messages are redacted before output
    - Extra fields surfaced only from EXTRA_FIELDS; anything else (password, token) is dropped
    - JSON format in production, human-readable in development

Design Decisions:
    - ContextVar over passing operation down the call stack: the store and the
      credential service log without knowing which handler called them
    - Filters attached to the handler, not individual loggers: SQLAlchemy and
      uvicorn records get the same treatment
    - setup_logging called once on startup via lifespan
"""

import json
import logging
import re
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Iterator

SERVICE_NAME = "account-service"
SERVICE_VERSION = "1.0.0"

EXTRA_FIELDS = (
    "operation", "error_kind", "status_code", "path",
    "account_id", "user_id",
)

REDACTED = "[redacted]"

_current_operation: ContextVar[str | None] = ContextVar(
    "account_operation", default=None,
)

_BEARER = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)
_JWT = re.compile(r"\beyJ[\w-]*\.[\w-]+\.[\w-]+")


# ─── Operation Context ───────────────────────────────────────────

@contextmanager
def bind_operation(operation: str) -> Iterator[None]:
    """Tag every record logged inside the block with operation."""
    token = _current_operation.set(operation)
    try:
        yield
    finally:
        _current_operation.reset(token)


def current_operation() -> str | None:
    return _current_operation.get()


class OperationContextFilter(logging.Filter):
    """Copy the bound operation onto records that do not name one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "operation", None) is None:
            operation = _current_operation.get()
            if operation is not None:
                record.operation = operation
        return True


# ─── Redaction ───────────────────────────────────────────────────

def redact(text: str) -> str:
    """Mask bearer credentials and signed tokens in text."""
    text = _BEARER.sub(rf"\g<1>{REDACTED}", text)
    return _JWT.sub(REDACTED, text)


class RedactSecretsFilter(logging.Filter):
    """Rewrite the rendered message with tokens masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


# ─── Formatters ──────────────────────────────────────────────────

class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines, prefixed with the operation when one is bound."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        operation = getattr(record, "operation", None)
        return f"[{operation}] {line}" if operation else line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging for the service and return the installed handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    handler.addFilter(OperationContextFilter())
    handler.addFilter(RedactSecretsFilter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
