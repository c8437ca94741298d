"""
Service wiring and command-line entry point.

    python -m lexicache.main
"""
import asyncio
import logging
from typing import Optional

from lexicache.adapters.sql_adapter import SQLAdapter
from lexicache.core.config import Settings, settings
from lexicache.core.health import get_health_status
from lexicache.core.logging_config import setup_logging
from lexicache.services.i18n_service import I18nService
from lexicache.stores import build_store

logger = logging.getLogger(__name__)


def build_service(config: Optional[Settings] = None) -> I18nService:
    """
    Build an I18nService from settings.

    The cache backend (memory or redis) is chosen here, once.
    """
    config = config or settings
    return I18nService(
        adapter=SQLAdapter(config.DATABASE_URL),
        store=build_store(config),
        fallback_locale=config.FALLBACK_LOCALE,
    )


async def startup(service: I18nService) -> None:
    """Connect and load the cache"""
    logger.info("Starting lexicache...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Cache backend: {service.store.backend_name}")

    await service.init()

    health = await get_health_status(service)
    if health["status"] == "healthy":
        logger.info("All systems healthy")
    else:
        logger.warning(f"Health check issues: {health}")


async def main() -> None:
    setup_logging()
    service = build_service()
    try:
        await startup(service)
        for locale in await service.locales.list():
            keys = await service.translations.list(locale.code)
            marker = " (default)" if locale.is_default else ""
            logger.info(f"{locale.code}{marker}: {locale.english_name}, {len(keys)} keys")
    finally:
        await service.close()


if __name__ == "__main__":
    asyncio.run(main())
