"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

import click
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from comptable.config.settings import Settings, get_settings, reset_settings
from comptable.di import initialize_container, shutdown_container
from comptable.domain.exceptions import ComptableException
from comptable.infrastructure.monitoring import (
    get_logger,
    set_request_id,
    setup_logging,
)
from comptable.presentation.api.middleware import (
    comptable_exception_handler,
    request_validation_exception_handler,
)
from comptable.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from comptable.presentation.api.routes import balance, health, orders, users


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    # Structured logging (JSON only in production)
    json_logs = settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Comptable application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Comptable application...")
        await initialize_container()
        logger.info("Comptable application started successfully")

        yield

        logger.info("Shutting down Comptable application...")
        await shutdown_container()
        logger.info("Comptable application shutdown complete")

    app = FastAPI(
        title="Comptable API",
        description="Loyalty points ledger with accrual reconciliation",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    # Middleware chain (order matters!)
    # 1. Request ID: reuse the caller's X-Request-ID or generate one
    @app.middleware("http")
    async def tag_request_id(request: Request, call_next):
        request_id = set_request_id(request.headers.get("X-Request-ID"))
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # 2. Metrics middleware (SECOND for accurate timing)
    app.add_middleware(MetricsMiddleware)

    # 3. GZip compression middleware
    app.add_middleware(
        GZipMiddleware,
        minimum_size=1000,
        compresslevel=6,
    )

    # Exception handlers
    app.add_exception_handler(ComptableException, comptable_exception_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_exception_handler
    )

    # Register routes
    app.include_router(health.router)
    app.include_router(users.router, prefix="/api")
    app.include_router(orders.router, prefix="/api")
    app.include_router(balance.router, prefix="/api")

    @app.get("/metrics", tags=["Monitoring"])
    async def metrics():
        """
        Prometheus metrics endpoint.

        Returns metrics in Prometheus text format for scraping.
        """
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
        )

    logger.info("Comptable application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance (lazy initialization).

    For uvicorn: uvicorn comptable.main:get_app --factory
    """
    return create_app()


@click.command()
@click.option("--address", "-a", default=None, help="host:port to listen on")
@click.option("--database-uri", "-d", default=None, help="Database connection URL")
@click.option(
    "--accrual-address", "-r", default=None, help="Accrual system base URL"
)
def main(address, database_uri, accrual_address):
    """Run the Comptable server with uvicorn."""
    import uvicorn

    # Flags outrank the environment
    overrides = {
        "RUN_ADDRESS": address,
        "DATABASE_URI": database_uri,
        "ACCRUAL_SYSTEM_ADDRESS": accrual_address,
    }
    for key, value in overrides.items():
        if value is not None:
            os.environ[key] = value
    reset_settings()

    settings = get_settings()
    click.echo(f"Comptable listening on {settings.RUN_ADDRESS}")

    uvicorn.run(
        "comptable.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
