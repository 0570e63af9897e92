"""Health & Readiness Probes — liveness and readiness for the account service.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 only when the account database is unreachable
    - Readiness reports token-signing state but never the secret itself
    - Service name and version come from observability, same values the logs carry

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - A placeholder JWT secret is reported, not failed: local stacks run on the default
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import account_service.infrastructure.database as database
from account_service.config import get_settings
from account_service.infrastructure.observability import SERVICE_NAME, SERVICE_VERSION

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — account database connectivity plus token-signing state."""
    settings = get_settings()
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "token_signing": (
            "placeholder_secret" if settings.uses_placeholder_secret else "configured"
        ),
        "token_ttl_seconds": settings.token_ttl_seconds,
    }
    if not db_ok:
        logger.warning("Readiness failed: account database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": checks,
            },
        )
    return {"status": "ready", "checks": checks}
