"""
Health check utilities
"""
from typing import Dict, Any, TYPE_CHECKING
import logging

from lexicache.core.config import settings

if TYPE_CHECKING:
    from lexicache.services.i18n_service import I18nService

logger = logging.getLogger(__name__)


async def check_database(service: "I18nService") -> Dict[str, Any]:
    """
    Check source-of-truth connectivity.

    Returns:
        Dictionary with status and details
    """
    if await service.adapter.ping():
        return {
            "status": "healthy",
            "message": f"Database connection successful ({service.adapter.adapter_name})"
        }
    return {
        "status": "unhealthy",
        "message": "Database connection failed"
    }


async def check_cache(service: "I18nService") -> Dict[str, Any]:
    """
    Check cache store connectivity.

    Returns:
        Dictionary with status and details
    """
    backend = service.store.backend_name
    if await service.store.ping():
        return {
            "status": "healthy",
            "message": f"Cache ({backend}) reachable"
        }
    logger.warning(f"Cache health check failed ({backend})")
    return {
        "status": "unhealthy",
        "message": f"Cache ({backend}) unreachable"
    }


async def get_health_status(service: "I18nService") -> Dict[str, Any]:
    """
    Get overall health status.

    Both components are required: reads are served from the cache and
    writes go to the database.
    """
    db_status = await check_database(service)
    cache_status = await check_cache(service)

    overall_status = "healthy"
    if db_status["status"] != "healthy" or cache_status["status"] != "healthy":
        overall_status = "unhealthy"

    return {
        "status": overall_status,
        "environment": settings.ENVIRONMENT,
        "components": {
            "database": db_status,
            "cache": cache_status,
        }
    }
