"""
FastAPI application entry point.

Uses structured logging from core.logging module.
The redis client is created once at startup and shared through app.state.
"""

from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from core.cache import RedisStore, create_redis_client
from core.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .dependencies import get_store
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import config as config_router
from .routers import drupal as drupal_router
from .routers import keys as keys_router
from .routers import metrics as metrics_router

# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = get_logger("api")


def create_app() -> FastAPI:
    # API version prefix
    api_version = "v1"
    api_prefix = f"{settings.api_prefix}/{api_version}"

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    # The dashboard only reads
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    # GZip compression for responses > 500 bytes
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Request ID middleware (outermost, so request logs carry the client's ID)
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Create the shared redis client."""
        logger.info("app_startup", app_name=settings.app_name)
        app.state.redis = create_redis_client(settings)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Close the redis client."""
        logger.info("app_shutdown")
        client = getattr(app.state, "redis", None)
        if client is not None:
            client.close()

    @app.get("/health", tags=["health"])
    def health_check():
        """
        Health check endpoint (liveness probe).

        Does not touch the store. Use /health/ready for readiness checks.
        """
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check(store: RedisStore = Depends(get_store)):
        """
        Readiness check endpoint.

        Returns 200 when the store answers PING, 503 otherwise.
        """
        try:
            store.ping()
        except RedisError as e:
            logger.warning("readiness_check_failed", error=str(e))
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": {"redis": False}},
            )

        return {"status": "ready", "checks": {"redis": True}}

    # Register routers with versioned API prefix
    # API is accessible at /api/v1/*
    app.include_router(drupal_router.router, prefix=api_prefix)
    app.include_router(keys_router.router, prefix=api_prefix)
    app.include_router(metrics_router.router, prefix=api_prefix)
    app.include_router(config_router.router, prefix=api_prefix)

    return app


app = create_app()
