"""
Shared fixtures: a temporary SQLite source of truth and both cache stores
"""
import fakeredis
import pytest

from lexicache.adapters.sql_adapter import SQLAdapter
from lexicache.services.i18n_service import I18nService
from lexicache.stores.memory_store import MemoryStore
from lexicache.stores.redis_store import RedisStore


@pytest.fixture
def database_url(tmp_path):
    """SQLite file database, one per test"""
    return f"sqlite+aiosqlite:///{tmp_path / 'i18n.db'}"


@pytest.fixture
async def adapter(database_url):
    """Connected adapter with an empty schema"""
    adapter = SQLAdapter(database_url)
    await adapter.connect()
    yield adapter
    await adapter.close()


@pytest.fixture
def fake_redis():
    """Isolated fake Redis client"""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
async def redis_store(fake_redis):
    store = RedisStore(client=fake_redis, prefix="test:")
    yield store
    await store.close()


@pytest.fixture(params=["memory", "redis"])
async def store(request):
    """Every cache backend, for contract tests"""
    if request.param == "memory":
        yield MemoryStore()
        return

    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    store = RedisStore(client=client, prefix="test:")
    yield store
    await store.close()


@pytest.fixture
async def service(adapter, store):
    """Service over a real adapter, bootstrapped on an empty database"""
    service = I18nService(adapter, store, fallback_locale="en-US")
    await service.init()
    return service
