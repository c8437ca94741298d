"""
lexicache - locales and translations in a relational store, served from a read cache
"""
from lexicache.adapters import SQLAdapter
from lexicache.core.exceptions import BootstrapError, ErrorCode, ErrorKind, I18nError
from lexicache.core.result import Failure, Result, Success
from lexicache.services import I18nService
from lexicache.stores import MemoryStore, RedisStore

__version__ = "0.1.0"

__all__ = [
    "I18nService",
    "SQLAdapter",
    "MemoryStore",
    "RedisStore",
    "Success",
    "Failure",
    "Result",
    "I18nError",
    "BootstrapError",
    "ErrorCode",
    "ErrorKind",
]
