"""
Redis cache store.

Layout under the configured prefix:
    {prefix}locales               hash  code -> LocaleData JSON
    {prefix}translations:{code}   hash  key -> value
"""
import logging
from functools import wraps
from typing import Dict, List, Optional, Union

import redis.asyncio as redis
from redis.exceptions import RedisError

from lexicache.core.exceptions import CacheUnavailableError
from lexicache.schemas.i18n import LocaleData
from lexicache.stores.base import CacheStore
from lexicache.stores.seeds import (
    AllLocales,
    GetAllTarget,
    GetTarget,
    LocalePatch,
    LocaleRecord,
    LocaleRecords,
    LocaleRef,
    LocaleTranslations,
    RemoveTarget,
    SetManyTarget,
    SetTarget,
    TranslationRecord,
    TranslationRecords,
    TranslationRef,
    UpdateTarget,
    unsupported,
)

logger = logging.getLogger(__name__)


def _redis_errors(func):
    """Surface transport failures as CacheUnavailableError."""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except RedisError as e:
            logger.warning(f"Redis {func.__name__.upper()} error: {e}")
            raise CacheUnavailableError(f"Redis {func.__name__} failed: {e}") from e
    return wrapper


class RedisStore(CacheStore):
    """Cache store backed by Redis hashes, with pipelined batch writes."""

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        prefix: str = "i18n:",
        client: Optional[redis.Redis] = None,
    ):
        """
        Args:
            url: Redis connection URL (ignored when client is given)
            prefix: Namespace for every key this store touches
            client: Pre-built client; must use decode_responses=True
        """
        self.prefix = prefix
        self._pool: Optional[redis.ConnectionPool] = None
        self._owns_client = client is None
        if client is None:
            self._pool = redis.ConnectionPool.from_url(
                url,
                max_connections=20,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5,
            )
            client = redis.Redis(connection_pool=self._pool)
        self._client = client

    @property
    def backend_name(self) -> str:
        return "redis"

    @property
    def locales_key(self) -> str:
        return f"{self.prefix}locales"

    def translations_key(self, locale: str) -> str:
        return f"{self.prefix}translations:{locale}"

    @_redis_errors
    async def load(
        self,
        locales: List[LocaleData],
        translations: Dict[str, Dict[str, str]]
    ) -> None:
        """
        Replace every key under the prefix with the given snapshot.

        Stale translation maps are collected with SCAN before the MULTI/EXEC
        block, so a map created between the scan and EXEC survives the load.
        Writes are expected to be serialized with load by the caller.
        """
        stale = [key async for key in self._client.scan_iter(match=self.translations_key("*"))]

        # One MULTI/EXEC: drop everything, then write the snapshot
        pipe = self._client.pipeline(transaction=True)
        pipe.delete(self.locales_key, *stale)
        if locales:
            pipe.hset(
                self.locales_key,
                mapping={locale.code: locale.model_dump_json() for locale in locales},
            )
        for code, values in translations.items():
            if values:
                pipe.hset(self.translations_key(code), mapping=values)
        await pipe.execute()
        logger.debug(f"Redis store loaded {len(locales)} locales, dropped {len(stale)} stale maps")

    @_redis_errors
    async def get(self, target: GetTarget) -> Union[LocaleData, str, None]:
        match target:
            case LocaleRef(code=code):
                raw = await self._client.hget(self.locales_key, code)
                return LocaleData.model_validate_json(raw) if raw else None
            case TranslationRef(locale=locale, key=key):
                return await self._client.hget(self.translations_key(locale), key)
            case _:
                raise unsupported("get", target)

    @_redis_errors
    async def get_all(self, target: GetAllTarget) -> Union[List[LocaleData], Dict[str, str]]:
        match target:
            case AllLocales():
                values = await self._client.hvals(self.locales_key)
                return [LocaleData.model_validate_json(raw) for raw in values]
            case LocaleTranslations(locale=locale):
                return await self._client.hgetall(self.translations_key(locale))
            case _:
                raise unsupported("get_all", target)

    @_redis_errors
    async def set(self, target: SetTarget) -> None:
        match target:
            case LocaleRecord(locale=locale):
                await self._client.hset(self.locales_key, locale.code, locale.model_dump_json())
            case TranslationRecord(locale=locale, key=key, value=value):
                # HSET creates the hash when missing
                await self._client.hset(self.translations_key(locale), key, value)
            case _:
                raise unsupported("set", target)

    @_redis_errors
    async def set_many(self, target: SetManyTarget) -> None:
        match target:
            case LocaleRecords(locales=locales):
                if not locales:
                    return
                await self._client.hset(
                    self.locales_key,
                    mapping={locale.code: locale.model_dump_json() for locale in locales},
                )
            case TranslationRecords(locale=locale, translations=translations):
                if not translations:
                    return
                await self._client.hset(self.translations_key(locale), mapping=translations)
            case _:
                raise unsupported("set_many", target)

    @_redis_errors
    async def update(self, target: UpdateTarget) -> bool:
        match target:
            case LocalePatch(code=code, fields=fields):
                raw = await self._client.hget(self.locales_key, code)
                if not raw:
                    return False
                merged = self.merge_locale(LocaleData.model_validate_json(raw), fields)
                await self._client.hset(self.locales_key, code, merged.model_dump_json())
                return True
            case TranslationRecord():
                await self.set(target)
                return True
            case _:
                raise unsupported("update", target)

    @_redis_errors
    async def remove(self, target: RemoveTarget) -> None:
        match target:
            case LocaleRef(code=code):
                pipe = self._client.pipeline(transaction=True)
                pipe.hdel(self.locales_key, code)
                pipe.delete(self.translations_key(code))
                await pipe.execute()
            case TranslationRef(locale=locale, key=key):
                await self._client.hdel(self.translations_key(locale), key)
            case _:
                raise unsupported("remove", target)

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning(f"Redis PING failed: {e}")
            return False

    async def close(self) -> None:
        """Close the client if this store built it; injected clients stay open."""
        if not self._owns_client:
            return
        await self._client.aclose()
        if self._pool is not None:
            await self._pool.disconnect()
        logger.info("Redis cache disconnected")
