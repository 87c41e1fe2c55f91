from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import root_router, router as api_router
from app.config.settings import Settings, get_settings
from app.core.error_handling import GlobalExceptionHandler, register_exception_handlers
from app.core.logging import get_logger, setup_logging
from app.core.middleware import register_middlewares
from app.core.rate_limiting import RateLimiter, RateLimitMiddleware, build_rate_limit_store
from app.core.security import JWTManager, PasswordHasher
from app.db.init_db import init_db
from app.db.session import Database

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Builds the database handle, token manager and password hasher once
      and keeps them on ``app.state``.
    - Registers CORS, rate limiting, core middleware, and exception handlers.
    - Includes the API router under API_PREFIX.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        version=settings.PROJECT_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.jwt_manager = JWTManager.from_settings(settings)
    app.state.password_hasher = PasswordHasher(settings.PASSWORD_BCRYPT_ROUNDS)
    app.state.auth_limiter = None

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=settings.CORS_ORIGINS != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.RATE_LIMIT_ENABLED:
        store = build_rate_limit_store(settings)
        app.state.auth_limiter = RateLimiter(
            store,
            limit=settings.RATE_LIMIT_AUTH,
            period=settings.RATE_LIMIT_WINDOW_SECONDS,
            scope="auth",
        )
        app.add_middleware(
            RateLimitMiddleware,
            limiter=RateLimiter(
                store,
                limit=settings.RATE_LIMIT_DEFAULT,
                period=settings.RATE_LIMIT_WINDOW_SECONDS,
                scope="api",
            ),
            exempt_paths=("/", f"{settings.API_PREFIX}/health"),
        )

    handler = GlobalExceptionHandler(settings)
    register_exception_handlers(app, handler)
    # Registered last so request IDs are bound before any other middleware runs
    register_middlewares(app, handler, include_security=True)

    app.include_router(root_router)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.on_event("startup")
    async def on_startup() -> None:
        if settings.AUTO_CREATE_SCHEMA:
            init_db(app.state.database, settings)
        logger.info(
            f"{settings.PROJECT_NAME} started",
            extra={"environment": settings.ENVIRONMENT, "version": settings.PROJECT_VERSION},
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        app.state.database.dispose()

    return app


app = create_app()
