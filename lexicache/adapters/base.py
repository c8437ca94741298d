"""
Base adapter interface for the relational source of truth
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from lexicache.core.result import Result
from lexicache.schemas.i18n import LocaleData, TranslationData


class LocaleCollection(ABC):
    """Locale records in the source of truth."""

    @abstractmethod
    async def list(self) -> Result[List[LocaleData]]:
        """Return every locale, ordered by code."""
        pass

    @abstractmethod
    async def create(
        self,
        code: str,
        native_name: str,
        english_name: str,
        is_default: bool = False,
        seed: Optional[Dict[str, str]] = None
    ) -> Result[LocaleData]:
        """
        Insert a locale, with its initial translations when seed is given.

        Fails with LOCALE_ALREADY_EXISTS if the code is taken. Marking the
        new locale as default clears the flag on every other locale. The
        locale and its seed translations are written in one transaction.
        """
        pass

    @abstractmethod
    async def update(self, code: str, fields: Dict[str, Any]) -> Result[LocaleData]:
        """
        Update native_name, english_name and/or is_default in place.
        Fails with LOCALE_NOT_FOUND if the code is unknown.
        """
        pass

    @abstractmethod
    async def delete(self, code: str) -> Result[Dict[str, Any]]:
        """Delete a locale and every translation under it."""
        pass


class TranslationCollection(ABC):
    """Translation entries in the source of truth."""

    @abstractmethod
    async def list(self, locale: Optional[str] = None) -> Result[List[TranslationData]]:
        """Return every translation, or those of one locale."""
        pass

    @abstractmethod
    async def create(self, locale: str, key: str, value: str) -> Result[TranslationData]:
        """
        Insert a translation.

        Fails with LOCALE_NOT_FOUND if the locale does not exist and with
        TRANSLATION_ALREADY_EXISTS if the (locale, key) pair is taken.
        """
        pass

    @abstractmethod
    async def create_many(self, locale: str, translations: Dict[str, str]) -> Result[List[TranslationData]]:
        """Insert several translations into one locale, all or nothing."""
        pass

    @abstractmethod
    async def update(self, locale: str, key: str, value: str) -> Result[TranslationData]:
        """Fails with TRANSLATION_NOT_FOUND if the pair does not exist."""
        pass

    @abstractmethod
    async def delete(self, locale: str, key: str) -> Result[Dict[str, Any]]:
        """Delete one translation; absence is not an error."""
        pass


class BaseAdapter(ABC):
    """
    Source-of-truth adapter.

    Every collection operation returns a Success or Failure; nothing raises
    across this boundary. Only connect() is allowed to raise, since a store
    that cannot be reached at startup is fatal.
    """

    locales: LocaleCollection
    translations: TranslationCollection

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection and ensure the schema. Safe to call twice."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the connection pool."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Health probe"""
        pass

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return adapter name (postgresql, sqlite, ...)"""
        pass
