"""
In-process cache store
"""
import logging
from typing import Dict, List, Optional, Union

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


class MemoryStore(CacheStore):
    """
    Dict-backed store living in the current process.

    Locale records are kept keyed by code in insertion order; translation
    maps are keyed by locale code. Nothing here awaits, so every operation
    is atomic with respect to other coroutines.
    """

    def __init__(self):
        self._locales: Dict[str, LocaleData] = {}
        self._translations: Dict[str, Dict[str, str]] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def load(
        self,
        locales: List[LocaleData],
        translations: Dict[str, Dict[str, str]]
    ) -> None:
        new_locales = {locale.code: locale for locale in locales}
        new_translations = {code: dict(values) for code, values in translations.items()}
        for code in new_locales:
            new_translations.setdefault(code, {})

        self._locales = new_locales
        self._translations = new_translations
        logger.debug(f"Memory store loaded {len(new_locales)} locales")

    async def get(self, target: GetTarget) -> Union[LocaleData, str, None]:
        match target:
            case LocaleRef(code=code):
                return self._locales.get(code)
            case TranslationRef(locale=locale, key=key):
                return self._translations.get(locale, {}).get(key)
            case _:
                raise unsupported("get", target)

    async def get_all(self, target: GetAllTarget) -> Union[List[LocaleData], Dict[str, str]]:
        match target:
            case AllLocales():
                return list(self._locales.values())
            case LocaleTranslations(locale=locale):
                return dict(self._translations.get(locale, {}))
            case _:
                raise unsupported("get_all", target)

    async def set(self, target: SetTarget) -> None:
        match target:
            case LocaleRecord(locale=locale):
                self._put_locale(locale)
            case TranslationRecord(locale=locale, key=key, value=value):
                self._translations.setdefault(locale, {})[key] = value
            case _:
                raise unsupported("set", target)

    async def set_many(self, target: SetManyTarget) -> None:
        match target:
            case LocaleRecords(locales=locales):
                for locale in locales:
                    self._put_locale(locale)
            case TranslationRecords(locale=locale, translations=translations):
                self._translations.setdefault(locale, {}).update(translations)
            case _:
                raise unsupported("set_many", target)

    async def update(self, target: UpdateTarget) -> bool:
        match target:
            case LocalePatch(code=code, fields=fields):
                existing: Optional[LocaleData] = self._locales.get(code)
                if existing is None:
                    return False
                self._locales[code] = self.merge_locale(existing, fields)
                return True
            case TranslationRecord():
                await self.set(target)
                return True
            case _:
                raise unsupported("update", target)

    async def remove(self, target: RemoveTarget) -> None:
        match target:
            case LocaleRef(code=code):
                self._locales.pop(code, None)
                self._translations.pop(code, None)
            case TranslationRef(locale=locale, key=key):
                self._translations.get(locale, {}).pop(key, None)
            case _:
                raise unsupported("remove", target)

    def _put_locale(self, locale: LocaleData) -> None:
        self._locales[locale.code] = locale
        self._translations.setdefault(locale.code, {})
