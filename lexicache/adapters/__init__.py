"""
Source-of-truth adapters
"""
from lexicache.adapters.base import BaseAdapter, LocaleCollection, TranslationCollection
from lexicache.adapters.sql_adapter import SQLAdapter

__all__ = [
    "BaseAdapter",
    "LocaleCollection",
    "TranslationCollection",
    "SQLAdapter",
]
