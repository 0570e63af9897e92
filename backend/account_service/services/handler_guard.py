"""Handler Guard — ensures nothing but a ServiceError escapes a request handler.

Invariants:
    - ServiceError passes through untouched
    - Any other exception is logged with traceback and replaced by INTERNAL
    - The replacement never carries the original message (no store text leaks)
    - Everything logged while the handler runs is tagged with its operation name
"""

import functools
import logging
from typing import Awaitable, Callable, ParamSpec, TypeVar

from account_service.core.errors import ServiceError, internal_error
from account_service.infrastructure.observability import bind_operation

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def guarded(operation: str):
    """Decorate an async handler so unexpected failures surface as INTERNAL."""

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with bind_operation(operation):
                try:
                    return await func(*args, **kwargs)
                except ServiceError:
                    raise
                except Exception:
                    logger.error(
                        f"Unexpected failure in {operation}", exc_info=True,
                    )
                    raise internal_error() from None
        return wrapper

    return decorator
