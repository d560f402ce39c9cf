"""
FastAPI application entry point.

Uses structured logging from devconnector.logging.
"""

import os

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devconnector.db import db
from devconnector.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .error_handlers import register_exception_handlers
from .routers import profile as profile_router

# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = get_logger("api")


def _is_production() -> bool:
    return os.getenv("ENV", "development").lower() in ("production", "prod")


def check_configuration() -> None:
    """Log configuration problems; fatal ones abort startup in production."""
    errors, warnings = settings.validate_production_config()
    for warning in warnings:
        logger.warning("config_warning", message=warning)

    if not errors:
        return
    for error in errors:
        logger.error("config_error", error=error)
    if _is_production():
        raise RuntimeError("Invalid production configuration: " + "; ".join(errors))


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
            "X-Auth-Token",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    # Structured request logging middleware (also assigns request IDs)
    app.add_middleware(RequestLoggingMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        logger.info("app_startup", app_name=settings.app_name)

        check_configuration()

        db.initialize(settings.database_url)
        if settings.auto_create_tables:
            db.create_all_tables()
        logger.info("database_initialized")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown."""
        logger.info("app_shutdown")

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        Returns 200 if the database answers, 503 otherwise.
        """
        check = db.health_check()
        if not check["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready"},
            )
        return {"status": "ready", "latency_ms": check["latency_ms"]}

    # API is accessible at /api/profile/*
    app.include_router(profile_router.router, prefix=settings.api_prefix)

    return app


app = create_app()
