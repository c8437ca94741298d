"""
Tests for the SQLAlchemy source-of-truth adapter (SQLite via aiosqlite)
"""
import pytest
from sqlalchemy.exc import OperationalError

from lexicache.adapters.sql_adapter import SQLAdapter
from lexicache.core.exceptions import BackendUnavailableError, ErrorCode, ErrorKind
from lexicache.core.result import Failure, Success


async def seed_locale(adapter, code="en-US", name="English", is_default=False):
    result = await adapter.locales.create(code, name, name, is_default)
    assert result.success, result
    return result.data


@pytest.mark.asyncio
async def test_connect_is_idempotent(adapter):
    await adapter.connect()
    assert adapter.is_connected
    assert await adapter.ping() is True
    assert adapter.adapter_name == "sqlite"


@pytest.mark.asyncio
async def test_connect_failure_is_fatal(tmp_path):
    adapter = SQLAdapter(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'i18n.db'}")

    with pytest.raises(BackendUnavailableError):
        await adapter.connect()

    assert adapter.is_connected is False


@pytest.mark.asyncio
async def test_operations_before_connect_return_failure(database_url):
    adapter = SQLAdapter(database_url)

    result = await adapter.locales.list()

    assert isinstance(result, Failure)
    assert result.code == ErrorCode.BACKEND_UNAVAILABLE.value


@pytest.mark.asyncio
async def test_create_locale(adapter):
    locale = await seed_locale(adapter, "tr-TR", "Turkish")

    assert locale.code == "tr-TR"
    assert locale.english_name == "Turkish"
    assert locale.is_default is False
    assert locale.created_at is not None
    assert locale.updated_at is not None

    listed = await adapter.locales.list()
    assert isinstance(listed, Success)
    assert [l.code for l in listed.data] == ["tr-TR"]


@pytest.mark.asyncio
async def test_create_locale_with_seed(adapter):
    result = await adapter.locales.create("tr-TR", "Türkçe", "Turkish", seed={"greeting": "Merhaba", "farewell": "Hoşça kal"})

    assert result.success
    listed = await adapter.translations.list(locale="tr-TR")
    assert {t.key: t.value for t in listed.data} == {"greeting": "Merhaba", "farewell": "Hoşça kal"}


@pytest.mark.asyncio
async def test_create_duplicate_locale_fails(adapter):
    await seed_locale(adapter, "en-US", "English")

    result = await adapter.locales.create("en-US", "Other", "Other")

    assert result.success is False
    assert result.error.code == ErrorCode.LOCALE_ALREADY_EXISTS
    assert result.error.kind == ErrorKind.ALREADY_EXISTS
    listed = await adapter.locales.list()
    assert [(l.code, l.english_name) for l in listed.data] == [("en-US", "English")]


@pytest.mark.asyncio
async def test_default_flag_is_exclusive(adapter):
    await seed_locale(adapter, "en-US", is_default=True)
    await seed_locale(adapter, "tr-TR", is_default=True)

    listed = await adapter.locales.list()
    assert {l.code: l.is_default for l in listed.data} == {"en-US": False, "tr-TR": True}

    result = await adapter.locales.update("en-US", {"is_default": True})
    assert result.success
    listed = await adapter.locales.list()
    assert {l.code: l.is_default for l in listed.data} == {"en-US": True, "tr-TR": False}


@pytest.mark.asyncio
async def test_update_locale(adapter):
    await seed_locale(adapter, "en-US", "English")

    result = await adapter.locales.update("en-US", {"english_name": "English (US)", "native_name": None})

    assert result.success
    assert result.data.english_name == "English (US)"
    assert result.data.native_name == "English"


@pytest.mark.asyncio
async def test_update_missing_locale_fails(adapter):
    result = await adapter.locales.update("zz-ZZ", {"english_name": "Nothing"})

    assert result.success is False
    assert result.error.code == ErrorCode.LOCALE_NOT_FOUND
    assert result.error.kind == ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_create_translation(adapter):
    await seed_locale(adapter)

    result = await adapter.translations.create("en-US", "greeting", "Hello")

    assert result.success
    assert result.data.model_dump() == {"locale_id": "en-US", "key": "greeting", "value": "Hello"}


@pytest.mark.asyncio
async def test_create_translation_requires_locale(adapter):
    result = await adapter.translations.create("fr-FR", "greeting", "Bonjour")

    assert result.success is False
    assert result.error.code == ErrorCode.LOCALE_NOT_FOUND
    assert result.error.kind == ErrorKind.REFERENTIAL_VIOLATION
    listed = await adapter.translations.list()
    assert listed.data == []


@pytest.mark.asyncio
async def test_create_duplicate_translation_fails(adapter):
    await seed_locale(adapter)
    await adapter.translations.create("en-US", "greeting", "Hello")

    result = await adapter.translations.create("en-US", "greeting", "Hi")

    assert result.success is False
    assert result.error.code == ErrorCode.TRANSLATION_ALREADY_EXISTS
    listed = await adapter.translations.list(locale="en-US")
    assert [t.value for t in listed.data] == ["Hello"]


@pytest.mark.asyncio
async def test_same_key_in_two_locales(adapter):
    await seed_locale(adapter, "en-US")
    await seed_locale(adapter, "tr-TR")

    assert (await adapter.translations.create("en-US", "greeting", "Hello")).success
    assert (await adapter.translations.create("tr-TR", "greeting", "Merhaba")).success

    listed = await adapter.translations.list()
    assert [(t.locale_id, t.value) for t in listed.data] == [("en-US", "Hello"), ("tr-TR", "Merhaba")]
    only_tr = await adapter.translations.list(locale="tr-TR")
    assert [t.value for t in only_tr.data] == ["Merhaba"]


@pytest.mark.asyncio
async def test_create_many_is_all_or_nothing(adapter):
    await seed_locale(adapter)
    await adapter.translations.create("en-US", "b", "existing")

    result = await adapter.translations.create_many("en-US", {"a": "1", "b": "2"})

    assert result.success is False
    assert result.error.code == ErrorCode.TRANSLATION_ALREADY_EXISTS
    listed = await adapter.translations.list(locale="en-US")
    assert {t.key: t.value for t in listed.data} == {"b": "existing"}

    result = await adapter.translations.create_many("en-US", {"a": "1", "c": "3"})
    assert result.success
    assert len(result.data) == 2


@pytest.mark.asyncio
async def test_update_translation(adapter):
    await seed_locale(adapter)
    await adapter.translations.create("en-US", "greeting", "Hello")

    result = await adapter.translations.update("en-US", "greeting", "Hi")

    assert result.success
    listed = await adapter.translations.list(locale="en-US")
    assert [t.value for t in listed.data] == ["Hi"]


@pytest.mark.asyncio
async def test_update_missing_translation_fails(adapter):
    await seed_locale(adapter)

    result = await adapter.translations.update("en-US", "missing", "value")

    assert result.success is False
    assert result.error.code == ErrorCode.TRANSLATION_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_translation_is_idempotent(adapter):
    await seed_locale(adapter)
    await adapter.translations.create("en-US", "greeting", "Hello")

    first = await adapter.translations.delete("en-US", "greeting")
    second = await adapter.translations.delete("en-US", "greeting")

    assert first.success and first.data["deleted"] is True
    assert second.success and second.data["deleted"] is False


@pytest.mark.asyncio
async def test_delete_locale_cascades(adapter):
    await seed_locale(adapter, "en-US")
    await seed_locale(adapter, "tr-TR")
    await adapter.translations.create_many("tr-TR", {"a": "1", "b": "2", "c": "3"})
    await adapter.translations.create("en-US", "a", "1")

    result = await adapter.locales.delete("tr-TR")

    assert result.success
    assert result.data == {"code": "tr-TR", "deleted": True, "translations_deleted": 3}
    remaining = await adapter.translations.list()
    assert [(t.locale_id, t.key) for t in remaining.data] == [("en-US", "a")]


@pytest.mark.asyncio
async def test_connectivity_faults_become_failures(adapter, monkeypatch):
    def broken_session():
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    monkeypatch.setattr(adapter, "session", broken_session)

    result = await adapter.translations.create("en-US", "greeting", "Hello")

    assert isinstance(result, Failure)
    assert result.error.code == ErrorCode.BACKEND_UNAVAILABLE
    assert result.error.kind == ErrorKind.BACKEND_UNAVAILABLE


@pytest.mark.asyncio
async def test_unexpected_faults_become_failures(adapter, monkeypatch):
    def broken_session():
        raise RuntimeError("boom")

    monkeypatch.setattr(adapter, "session", broken_session)

    result = await adapter.locales.list()

    assert result.success is False
    assert result.error.code == ErrorCode.BACKEND_ERROR
