"""
SQLAlchemy (asyncio) implementation of the source-of-truth adapter.

Each operation runs in its own session/transaction. Known conditions are
raised as I18nError inside the transaction (rolling it back) and turned
into Failure results by the ``captured`` decorator, together with any
driver or connectivity fault.
"""
import logging
from functools import wraps
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.sql import func

from lexicache.adapters.base import BaseAdapter, LocaleCollection, TranslationCollection
from lexicache.core.database import Base, create_engine, create_session_factory
from lexicache.core.exceptions import (
    BackendError,
    BackendUnavailableError,
    I18nError,
    LocaleAlreadyExistsError,
    LocaleNotFoundError,
    ReferentialViolationError,
    TranslationAlreadyExistsError,
    TranslationNotFoundError,
)
from lexicache.core.monitoring import track_error
from lexicache.core.result import Failure, Result, Success
from lexicache.models.locale import Locale
from lexicache.models.translation import Translation
from lexicache.schemas.i18n import LocaleData, TranslationData

logger = logging.getLogger(__name__)

LOCALE_FIELDS = ("native_name", "english_name", "is_default")


def _is_connectivity_error(error: Exception) -> bool:
    if isinstance(error, (OperationalError, InterfaceError, OSError)):
        return True
    return isinstance(error, DBAPIError) and error.connection_invalidated


def captured(operation: str):
    """
    Run an adapter coroutine and wrap its outcome in a Result.

    Args:
        operation: Name used in logs and error tracking (e.g. "locales.create")
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Result:
            try:
                return Success(await func(*args, **kwargs))
            except I18nError as e:
                logger.warning(f"{operation} rejected: {e.code.value} - {e.message}")
                return Failure(e)
            except Exception as e:
                if _is_connectivity_error(e):
                    error = BackendUnavailableError(f"{operation}: database unavailable: {e}")
                else:
                    error = BackendError(f"{operation}: {e}")
                track_error(f"adapter.{operation}", code=error.code.value, metadata={"error": str(e)})
                return Failure(error)
        return wrapper
    return decorator


class SQLLocales(LocaleCollection):
    """Locales table operations"""

    def __init__(self, adapter: "SQLAdapter"):
        self._adapter = adapter

    @captured("locales.list")
    async def list(self) -> List[LocaleData]:
        async with self._adapter.session() as session:
            rows = await session.scalars(select(Locale).order_by(Locale.code))
            return [LocaleData.model_validate(row) for row in rows]

    @captured("locales.create")
    async def create(
        self,
        code: str,
        native_name: str,
        english_name: str,
        is_default: bool = False,
        seed: Optional[Dict[str, str]] = None
    ) -> LocaleData:
        async with self._adapter.session() as session:
            try:
                async with session.begin():
                    if await session.get(Locale, code) is not None:
                        raise LocaleAlreadyExistsError(f"Locale '{code}' already exists")

                    if is_default:
                        await _clear_default(session)

                    locale = Locale(
                        code=code,
                        native_name=native_name,
                        english_name=english_name,
                        is_default=is_default,
                    )
                    session.add(locale)

                    if seed:
                        await session.flush()
                        await _insert_translations(session, code, seed)
            except IntegrityError as e:
                # Lost a race with a concurrent insert of the same code
                raise LocaleAlreadyExistsError(f"Locale '{code}' already exists") from e

            await session.refresh(locale)
            return LocaleData.model_validate(locale)

    @captured("locales.update")
    async def update(self, code: str, fields: Dict[str, Any]) -> LocaleData:
        changes = {name: fields[name] for name in LOCALE_FIELDS if fields.get(name) is not None}

        async with self._adapter.session() as session:
            async with session.begin():
                locale = await session.get(Locale, code)
                if locale is None:
                    raise LocaleNotFoundError(f"Locale '{code}' does not exist")

                if changes.get("is_default"):
                    await _clear_default(session, keep=code)

                for name, value in changes.items():
                    setattr(locale, name, value)
                locale.updated_at = func.now()

            await session.refresh(locale)
            return LocaleData.model_validate(locale)

    @captured("locales.delete")
    async def delete(self, code: str) -> Dict[str, Any]:
        async with self._adapter.session() as session:
            async with session.begin():
                # Dependent translations first, in the same transaction
                removed = await session.execute(
                    delete(Translation).where(Translation.locale_id == code)
                )
                deleted = await session.execute(delete(Locale).where(Locale.code == code))

            return {
                "code": code,
                "deleted": deleted.rowcount > 0,
                "translations_deleted": removed.rowcount,
            }


class SQLTranslations(TranslationCollection):
    """Keys table operations"""

    def __init__(self, adapter: "SQLAdapter"):
        self._adapter = adapter

    @captured("translations.list")
    async def list(self, locale: Optional[str] = None) -> List[TranslationData]:
        query = select(Translation).order_by(Translation.locale_id, Translation.key)
        if locale is not None:
            query = query.where(Translation.locale_id == locale)

        async with self._adapter.session() as session:
            rows = await session.scalars(query)
            return [TranslationData.model_validate(row) for row in rows]

    @captured("translations.create")
    async def create(self, locale: str, key: str, value: str) -> TranslationData:
        async with self._adapter.session() as session:
            try:
                async with session.begin():
                    await _require_locale(session, locale)

                    existing = await session.get(Translation, {"key": key, "locale_id": locale})
                    if existing is not None:
                        raise TranslationAlreadyExistsError(
                            f"Translation '{key}' already exists in '{locale}'"
                        )

                    session.add(Translation(locale_id=locale, key=key, value=value))
            except IntegrityError as e:
                raise TranslationAlreadyExistsError(
                    f"Translation '{key}' already exists in '{locale}'"
                ) from e

            return TranslationData(locale_id=locale, key=key, value=value)

    @captured("translations.create_many")
    async def create_many(self, locale: str, translations: Dict[str, str]) -> List[TranslationData]:
        if not translations:
            return []

        async with self._adapter.session() as session:
            try:
                async with session.begin():
                    await _require_locale(session, locale)

                    taken = (await session.scalars(
                        select(Translation.key).where(
                            Translation.locale_id == locale,
                            Translation.key.in_(list(translations)),
                        )
                    )).all()
                    if taken:
                        raise TranslationAlreadyExistsError(
                            f"Translations already exist in '{locale}': {', '.join(sorted(taken))}"
                        )

                    await _insert_translations(session, locale, translations)
            except IntegrityError as e:
                raise TranslationAlreadyExistsError(
                    f"Translations already exist in '{locale}'"
                ) from e

            return [
                TranslationData(locale_id=locale, key=key, value=value)
                for key, value in translations.items()
            ]

    @captured("translations.update")
    async def update(self, locale: str, key: str, value: str) -> TranslationData:
        async with self._adapter.session() as session:
            async with session.begin():
                translation = await session.get(Translation, {"key": key, "locale_id": locale})
                if translation is None:
                    raise TranslationNotFoundError(
                        f"Translation '{key}' does not exist in '{locale}'"
                    )
                translation.value = value

            return TranslationData(locale_id=locale, key=key, value=value)

    @captured("translations.delete")
    async def delete(self, locale: str, key: str) -> Dict[str, Any]:
        async with self._adapter.session() as session:
            async with session.begin():
                result = await session.execute(
                    delete(Translation).where(
                        Translation.locale_id == locale,
                        Translation.key == key,
                    )
                )

            return {"locale_id": locale, "key": key, "deleted": result.rowcount > 0}


async def _require_locale(session: AsyncSession, code: str) -> None:
    if await session.get(Locale, code) is None:
        raise ReferentialViolationError(f"Locale '{code}' does not exist")


async def _insert_translations(session: AsyncSession, locale: str, translations: Dict[str, str]) -> None:
    session.add_all([
        Translation(locale_id=locale, key=key, value=value)
        for key, value in translations.items()
    ])
    await session.flush()


async def _clear_default(session: AsyncSession, keep: Optional[str] = None) -> None:
    statement = update(Locale).where(Locale.is_default.is_(True)).values(is_default=False)
    if keep is not None:
        statement = statement.where(Locale.code != keep)
    await session.execute(statement.execution_options(synchronize_session=False))


class SQLAdapter(BaseAdapter):
    """
    Relational source of truth reached through SQLAlchemy's asyncio engine.

    The engine is owned by this instance: created in connect(), disposed in
    close(). Pass ``engine`` to share an existing one (it is then not
    disposed on close).
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        *,
        engine: Optional[AsyncEngine] = None,
        **engine_options: Any
    ):
        if database_url is None and engine is None:
            raise ValueError("SQLAdapter needs a database_url or an engine")

        self.database_url = database_url
        self._engine_options = engine_options
        self._engine: Optional[AsyncEngine] = engine
        self._owns_engine = engine is None
        self._sessions: Optional[async_sessionmaker] = None
        self._connected = False

        self.locales = SQLLocales(self)
        self.translations = SQLTranslations(self)

    @property
    def adapter_name(self) -> str:
        if self._engine is not None:
            return self._engine.dialect.name
        return self.database_url.split(":", 1)[0].split("+", 1)[0]

    @property
    def is_connected(self) -> bool:
        return self._connected and self._sessions is not None

    def session(self) -> AsyncSession:
        """New session bound to the adapter's engine."""
        if not self.is_connected:
            raise BackendUnavailableError("Adapter is not connected; call connect() first")
        return self._sessions()

    async def connect(self) -> None:
        if self.is_connected:
            return

        try:
            if self._engine is None:
                self._engine = create_engine(self.database_url, **self._engine_options)

            # Ensure schema (locales + keys)
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.error(f"❌ Database connection failed: {e}")
            await self._dispose()
            raise BackendUnavailableError(f"Could not connect to database: {e}") from e

        self._sessions = create_session_factory(self._engine)
        self._connected = True
        logger.info(f"✅ Database connected ({self.adapter_name}), tables created/verified")

    async def close(self) -> None:
        await self._dispose()
        self._sessions = None
        self._connected = False
        logger.info("Database disconnected")

    async def ping(self) -> bool:
        if not self.is_connected:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def _dispose(self) -> None:
        if self._engine is not None and self._owns_engine:
            await self._engine.dispose()
            self._engine = None
