"""
Tests for health reporting and service wiring
"""
from unittest.mock import AsyncMock

import pytest

from lexicache.core.config import Settings
from lexicache.core.health import get_health_status
from lexicache.main import build_service
from lexicache.stores.memory_store import MemoryStore
from lexicache.stores.redis_store import RedisStore


@pytest.mark.asyncio
async def test_health_check(service):
    """Test health status with both components up"""
    health = await get_health_status(service)

    assert health["status"] == "healthy"
    assert health["components"]["database"]["status"] == "healthy"
    assert health["components"]["cache"]["status"] == "healthy"


@pytest.mark.asyncio
async def test_health_check_reports_cache_outage(service, monkeypatch):
    monkeypatch.setattr(service.store, "ping", AsyncMock(return_value=False))

    health = await get_health_status(service)

    assert health["status"] == "unhealthy"
    assert health["components"]["cache"]["status"] == "unhealthy"


def test_build_service_selects_memory_store(database_url):
    service = build_service(Settings(DATABASE_URL=database_url, CACHE_BACKEND="memory", FALLBACK_LOCALE="tr-TR"))

    assert isinstance(service.store, MemoryStore)
    assert service.fallback_locale == "tr-TR"
    assert service.adapter.adapter_name == "sqlite"


def test_build_service_selects_redis_store(database_url):
    service = build_service(Settings(DATABASE_URL=database_url, CACHE_BACKEND="redis", CACHE_PREFIX="app:"))

    assert isinstance(service.store, RedisStore)
    assert service.store.locales_key == "app:locales"
