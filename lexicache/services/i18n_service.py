"""
I18n Service - locales and translations with a write-through read cache.

Writes go to the source-of-truth adapter first and are mirrored into the
cache store only when the adapter reports success. Reads are served from
the cache store alone. init()/refresh() rebuild the whole cache from the
adapter.
"""
import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Union

from lexicache.adapters.base import BaseAdapter
from lexicache.core.exceptions import BootstrapError, CacheUnavailableError
from lexicache.core.monitoring import monitor_performance
from lexicache.core.result import Failure, Result
from lexicache.schemas.i18n import LocaleData, LocaleUpdate, TranslationData
from lexicache.stores.base import CacheStore
from lexicache.stores.seeds import (
    AllLocales,
    LocalePatch,
    LocaleRecord,
    LocaleRef,
    LocaleTranslations,
    TranslationRecord,
    TranslationRecords,
    TranslationRef,
)

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{\{([^{}]*)\}\}")


def interpolate(text: str, variables: Optional[Dict[str, Any]] = None) -> str:
    """
    Substitute {{name}} placeholders.

    Placeholders without a matching variable are left as they are.
    """
    if not variables:
        return text

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        return match.group(0)

    return PLACEHOLDER.sub(replace, text)


def build_snapshot(
    locales: List[LocaleData],
    translations: List[TranslationData]
) -> Dict[str, Dict[str, str]]:
    """Project a flat translation list into locale -> {key: value}."""
    snapshot: Dict[str, Dict[str, str]] = {locale.code: {} for locale in locales}
    for translation in translations:
        if translation.locale_id in snapshot:
            snapshot[translation.locale_id][translation.key] = translation.value
    return snapshot


class LocaleOperations:
    """service.locales.*"""

    def __init__(self, service: "I18nService"):
        self._service = service

    async def list(self) -> List[LocaleData]:
        return await self._service.store.get_all(AllLocales())

    async def get(self, code: str) -> Optional[LocaleData]:
        return await self._service.store.get(LocaleRef(code))

    async def create(
        self,
        code: str,
        native_name: str,
        english_name: str,
        is_default: bool = False,
        translations_from_default: bool = False
    ) -> Result[LocaleData]:
        """
        Create a locale.

        Args:
            code: Locale code (e.g., 'tr-TR')
            native_name: Name in the locale's own language
            english_name: Name in English
            is_default: Mark as the default locale (clears the flag elsewhere)
            translations_from_default: Seed the new locale with a copy of the
                default locale's translations (the fallback locale when no
                locale is flagged as default)

        Returns:
            Success with the stored locale, or the adapter's Failure
        """
        adapter = self._service.adapter
        store = self._service.store

        seed: Dict[str, str] = {}
        if translations_from_default:
            source = await self._service.default_locale_code()
            if isinstance(source, Failure):
                return source
            if source is not None:
                rows = await adapter.translations.list(locale=source)
                if not rows.success:
                    return rows
                seed = {row.key: row.value for row in rows.data}

        response = await adapter.locales.create(code, native_name, english_name, is_default, seed=seed)
        if not response.success:
            return response

        await store.set(LocaleRecord(response.data))
        if response.data.is_default:
            await self._service.clear_cached_default(keep=code)

        if seed:
            await store.set_many(TranslationRecords(code, seed))
            logger.info(f"Seeded {len(seed)} translations into '{code}'")

        return response

    async def update(
        self,
        code: str,
        native_name: Optional[str] = None,
        english_name: Optional[str] = None,
        is_default: Optional[bool] = None
    ) -> Result[LocaleData]:
        fields = LocaleUpdate(
            native_name=native_name,
            english_name=english_name,
            is_default=is_default,
        ).model_dump(exclude_none=True)
        response = await self._service.adapter.locales.update(code, fields)
        if not response.success:
            return response

        store = self._service.store
        record = response.data
        if not await store.update(LocalePatch(code, record.model_dump())):
            # Cache lost the record; mirror the full row
            await store.set(LocaleRecord(record))
        if record.is_default:
            await self._service.clear_cached_default(keep=code)

        return response

    async def delete(self, code: str) -> Result[Dict[str, Any]]:
        response = await self._service.adapter.locales.delete(code)
        if response.success:
            await self._service.store.remove(LocaleRef(code))
        return response


class TranslationOperations:
    """service.translations.*"""

    def __init__(self, service: "I18nService"):
        self._service = service

    async def list(self, locale: str) -> Dict[str, str]:
        return await self._service.store.get_all(LocaleTranslations(locale))

    async def get(self, locale: str, key: str) -> Optional[str]:
        return await self._service.store.get(TranslationRef(locale, key))

    async def create(self, locale: str, key: str, value: str) -> Result[TranslationData]:
        response = await self._service.adapter.translations.create(locale, key, value)
        if response.success:
            await self._service.store.set(TranslationRecord(locale, key, value))
        return response

    async def create_many(self, locale: str, translations: Dict[str, str]) -> Result[List[TranslationData]]:
        response = await self._service.adapter.translations.create_many(locale, translations)
        if response.success and translations:
            await self._service.store.set_many(TranslationRecords(locale, dict(translations)))
        return response

    async def update(self, locale: str, key: str, value: str) -> Result[TranslationData]:
        response = await self._service.adapter.translations.update(locale, key, value)
        if response.success:
            await self._service.store.update(TranslationRecord(locale, key, value))
        return response

    async def delete(self, locale: str, key: str) -> Result[Dict[str, Any]]:
        response = await self._service.adapter.translations.delete(locale, key)
        if response.success:
            await self._service.store.remove(TranslationRef(locale, key))
        return response

    async def translate(self, locale: str, key: str, variables: Optional[Dict[str, Any]] = None) -> str:
        return await self._service.translate(locale, key, variables)


class I18nService:
    """
    Coordinates one adapter (source of truth) and one cache store.

    Both are fixed for the lifetime of the service.
    """

    DEFAULT_FALLBACK_LOCALE = "en-US"

    def __init__(
        self,
        adapter: BaseAdapter,
        store: CacheStore,
        fallback_locale: Optional[str] = DEFAULT_FALLBACK_LOCALE
    ):
        self._adapter = adapter
        self._store = store
        self.fallback_locale = fallback_locale

        self.locales = LocaleOperations(self)
        self.translations = TranslationOperations(self)

    @property
    def adapter(self) -> BaseAdapter:
        return self._adapter

    @property
    def store(self) -> CacheStore:
        return self._store

    async def connect(self) -> None:
        """Connect the adapter (idempotent). Raises BackendUnavailableError."""
        await self._adapter.connect()

    @monitor_performance
    async def init(self) -> None:
        """
        Load the full snapshot from the adapter into the cache.

        Locales and translations are fetched concurrently. If either fetch
        fails nothing is loaded and BootstrapError is raised.
        """
        await self.connect()

        locales, translations = await asyncio.gather(
            self._adapter.locales.list(),
            self._adapter.translations.list(),
        )

        failures = [result.error for result in (locales, translations) if not result.success]
        if failures:
            codes = ", ".join(error.code.value for error in failures)
            raise BootstrapError(f"Failed to load locales or translations ({codes})", causes=failures)

        snapshot = build_snapshot(locales.data, translations.data)
        await self._store.load(locales.data, snapshot)
        logger.info(
            f"Cache loaded: {len(locales.data)} locales, {len(translations.data)} translations "
            f"({self._store.backend_name})"
        )

    async def refresh(self) -> None:
        """Rebuild the cache from scratch; same as init()."""
        await self.init()

    async def translate(
        self,
        locale: str,
        key: str,
        variables: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Get translation by key with fallback and variable substitution.

        Args:
            locale: Requested locale code
            key: Translation key (e.g., 'greeting')
            variables: Values for {{name}} placeholders

        Returns:
            Translated text, or the key itself when no translation exists
        """
        try:
            text = await self._store.get(TranslationRef(locale, key))
            if text is None and self.fallback_locale and self.fallback_locale != locale:
                text = await self._store.get(TranslationRef(self.fallback_locale, key))
        except CacheUnavailableError as e:
            logger.warning(f"Translate '{key}' ({locale}) served raw key: {e}")
            return key

        if text is None:
            logger.debug(f"Missing translation '{key}' for '{locale}'")
            return key

        return interpolate(text, variables)

    async def default_locale_code(self) -> Union[str, None, Failure]:
        """Code of the locale flagged as default, else the fallback locale."""
        response = await self._adapter.locales.list()
        if not response.success:
            return response
        for locale in response.data:
            if locale.is_default:
                return locale.code
        codes = {locale.code for locale in response.data}
        return self.fallback_locale if self.fallback_locale in codes else None

    async def clear_cached_default(self, keep: str) -> None:
        """Mirror the adapter clearing is_default on every other locale."""
        for locale in await self._store.get_all(AllLocales()):
            if locale.is_default and locale.code != keep:
                await self._store.update(LocalePatch(locale.code, {"is_default": False}))

    async def close(self) -> None:
        try:
            await self._store.close()
        finally:
            await self._adapter.close()
