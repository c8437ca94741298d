"""
Tagged variants addressing the two entity classes a cache store holds.

Every store operation takes one of these instead of a string discriminant;
stores dispatch on them with ``match`` and reject anything else.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from lexicache.schemas.i18n import LocaleData


@dataclass(frozen=True)
class LocaleRef:
    """One locale by code (get, remove)."""
    code: str


@dataclass(frozen=True)
class TranslationRef:
    """One translation key within a locale (get, remove)."""
    locale: str
    key: str


@dataclass(frozen=True)
class AllLocales:
    """Every locale record (get_all)."""


@dataclass(frozen=True)
class LocaleTranslations:
    """The whole key -> value map of one locale (get_all)."""
    locale: str


@dataclass(frozen=True)
class LocaleRecord:
    """Upsert one locale record (set)."""
    locale: LocaleData


@dataclass(frozen=True)
class TranslationRecord:
    """Upsert one translation value (set, update)."""
    locale: str
    key: str
    value: str


@dataclass(frozen=True)
class LocaleRecords:
    """Upsert several locale records (set_many)."""
    locales: List[LocaleData] = field(default_factory=list)


@dataclass(frozen=True)
class TranslationRecords:
    """Upsert several values within one locale (set_many)."""
    locale: str
    translations: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LocalePatch:
    """Merge fields into an existing locale record (update)."""
    code: str
    fields: Dict[str, Any] = field(default_factory=dict)


GetTarget = Union[LocaleRef, TranslationRef]
GetAllTarget = Union[AllLocales, LocaleTranslations]
SetTarget = Union[LocaleRecord, TranslationRecord]
SetManyTarget = Union[LocaleRecords, TranslationRecords]
UpdateTarget = Union[LocalePatch, TranslationRecord]
RemoveTarget = Union[LocaleRef, TranslationRef]


def unsupported(operation: str, target: object) -> TypeError:
    return TypeError(f"{operation}() does not accept {type(target).__name__}")
