"""
Base cache store interface
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Union

from lexicache.schemas.i18n import LocaleData
from lexicache.stores.seeds import (
    GetAllTarget,
    GetTarget,
    RemoveTarget,
    SetManyTarget,
    SetTarget,
    UpdateTarget,
)


class CacheStore(ABC):
    """
    Read cache for locales and translations.

    The store is a projection of the source of truth and may be dropped
    and rebuilt with load() at any time. Implementations must give the same
    observable contract: in particular set() on a translation always creates
    the locale's container when it is missing.
    """

    @abstractmethod
    async def load(
        self,
        locales: List[LocaleData],
        translations: Dict[str, Dict[str, str]]
    ) -> None:
        """
        Replace the entire cache contents with a snapshot.

        Args:
            locales: Locale records
            translations: Mapping of locale code -> {key: value}
        """
        pass

    @abstractmethod
    async def get(self, target: GetTarget) -> Union[LocaleData, str, None]:
        """
        Get one locale record or one translation value.

        Returns:
            LocaleData for LocaleRef, str for TranslationRef, None if absent
        """
        pass

    @abstractmethod
    async def get_all(self, target: GetAllTarget) -> Union[List[LocaleData], Dict[str, str]]:
        """
        Get every locale record, or one locale's full key -> value map.
        An unknown locale yields an empty dict.
        """
        pass

    @abstractmethod
    async def set(self, target: SetTarget) -> None:
        """Idempotent upsert of one locale record or one translation value."""
        pass

    @abstractmethod
    async def set_many(self, target: SetManyTarget) -> None:
        """Batched set(); a single round trip where the backend supports it."""
        pass

    @abstractmethod
    async def update(self, target: UpdateTarget) -> bool:
        """
        Merge fields into a locale record, or set a translation value.

        Returns:
            False if the locale record does not exist (nothing is created)
        """
        pass

    @abstractmethod
    async def remove(self, target: RemoveTarget) -> None:
        """Delete a locale (with its translations) or one key. Idempotent."""
        pass

    async def ping(self) -> bool:
        """Health probe"""
        return True

    async def close(self) -> None:
        """Release backend resources"""
        return None

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return backend name (memory, redis)"""
        pass

    @staticmethod
    def merge_locale(existing: LocaleData, fields: Dict[str, object]) -> LocaleData:
        """Apply a partial update, ignoring unknown fields and the code."""
        allowed = {
            name: value for name, value in fields.items()
            if name in LocaleData.model_fields and name != "code"
        }
        return existing.model_copy(update=allowed)

