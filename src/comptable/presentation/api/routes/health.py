"""
Health check API routes.

Served at the application root, outside /api/user.
"""

from fastapi import APIRouter, Response, status

from comptable.config.settings import get_settings
from comptable.di.container import get_container

router = APIRouter(tags=["Health"])


@router.get("/ping", status_code=status.HTTP_200_OK)
async def ping(response: Response):
    """
    Database connectivity probe.

    Returns 200 if the database answers, 500 otherwise.
    """
    if await get_container().database.health_check():
        return {"status": "ok"}

    response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return {"status": "database unavailable"}


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """
    Comprehensive health check endpoint.

    Returns detailed status of all components.
    """
    settings = get_settings()
    container = get_container()

    db_healthy = await container.database.health_check()

    accrual_enabled = bool(settings.ACCRUAL_SYSTEM_ADDRESS)
    poller_running = accrual_enabled and container.accrual_poller.is_running

    return {
        "status": "healthy" if db_healthy else "degraded",
        "version": settings.APP_VERSION,
        "components": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
            },
            "accrual": {
                "enabled": accrual_enabled,
                "poller_running": poller_running,
                "circuit_breaker": container.circuit_breaker.get_stats(),
            },
        },
    }
