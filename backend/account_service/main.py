"""Account Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ServiceError → the uniform error envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created from metadata on startup when DATABASE_CREATE_TABLES is set
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from account_service.api.error_handlers import register_error_handlers
from account_service.api.routes import auth, health, users
from account_service.config import get_settings
from account_service.infrastructure.database import init_db
from account_service.infrastructure.observability import (
    SERVICE_VERSION, setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_all()
    if settings.uses_placeholder_secret:
        logger.warning("JWT_SECRET is the placeholder value; set it in production")
    logger.info("Account service started")
    yield
    await manager.dispose()
    logger.info("Account service shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Account Service API", version=SERVICE_VERSION, lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration
    application.include_router(health.router)
    application.include_router(auth.router)
    application.include_router(users.router)

    register_error_handlers(application)
    return application


app = create_app()
