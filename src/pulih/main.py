"""
PULIH FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (startup/shutdown)
- CORS configuration
- Error handling and rate limiting middleware
- Router registration

This is the production entry point for the PULIH backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pulih import __version__
from pulih.api.dependencies import get_memory_user_store, get_password_hasher
from pulih.api.middleware import (
    ErrorHandlerMiddleware,
    RateLimitConfig,
    RateLimitMiddleware,
    register_exception_handlers,
)
from pulih.api.v1.router import api_router
from pulih.config import Settings, get_settings
from pulih.config.logging_config import configure_logging, get_logger
from pulih.infrastructure.database import get_db_manager
from pulih.infrastructure.database.repositories import UserRepository
from pulih.infrastructure.metrics import metrics_router, update_system_info
from pulih.infrastructure.monitoring import init_sentry
from pulih.infrastructure.storage import UserStore
from pulih.services.auth import AuthService, TokenService

logger = get_logger(__name__)


async def _bootstrap_admin(settings: Settings, users: UserStore) -> None:
    auth = AuthService(users, get_password_hasher(), TokenService(settings.jwt), settings.safety)
    await auth.ensure_default_admin(settings.admin)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown of storage.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting PULIH application",
        env=settings.env,
        version=__version__,
        storage=settings.storage_backend,
    )

    try:
        if settings.storage_backend == "database":
            db = get_db_manager()
            await db.initialize()
            await db.create_all()
            async with db.session() as session:
                await _bootstrap_admin(settings, UserRepository(session))
        else:
            await _bootstrap_admin(settings, get_memory_user_store())

        yield

    finally:
        logger.info("Shutting down PULIH application")
        await get_db_manager().close()
        logger.info("PULIH application shutdown complete")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)
    init_sentry(
        dsn=settings.sentry.dsn,
        environment=settings.env,
        release=f"pulih@{__version__}",
        traces_sample_rate=settings.sentry.traces_sample_rate,
    )
    update_system_info(settings.env, __version__)

    app = FastAPI(
        title="PULIH API",
        description="Panic attack journal and recovery analytics - Backend API",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        config=RateLimitConfig(
            requests_per_minute=settings.safety.rate_limit_requests_per_minute,
            burst_size=settings.safety.rate_limit_burst,
            trust_forwarded_for=settings.safety.trust_forwarded_for,
            limited_prefixes=(f"/api/{settings.api_version}/auth",),
        ),
    )

    # Added last so it wraps everything else
    app.add_middleware(ErrorHandlerMiddleware)

    register_exception_handlers(app)

    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "PULIH API",
            "version": __version__,
            "status": "operational",
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "pulih.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
