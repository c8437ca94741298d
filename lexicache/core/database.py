"""
Database engine construction and declarative base
"""
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from lexicache.core.config import settings


# Base class for models
Base = declarative_base()


def create_engine(database_url: str, **options: Any) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Pool sizing from settings applies to server databases only; SQLite
    URLs get the driver defaults.
    """
    engine_options: Dict[str, Any] = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        engine_options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=3600,  # Recycle connections after 1 hour
        )
    engine_options.update(options)
    return create_async_engine(database_url, **engine_options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory bound to an engine."""
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
