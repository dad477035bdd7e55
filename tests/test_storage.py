"""Tests for KeyValueStore adapters: JSON file, SQLite, memory."""

import json
from pathlib import Path

import pytest

from referral.contract import KeyValueStore
from referral.sqlite_store import SqliteStore
from referral.storage import JsonFileStore, MemoryStore


@pytest.fixture
def json_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "referral_state.json"


@pytest.fixture
async def sqlite_store(tmp_path: Path) -> SqliteStore:
    s = SqliteStore(tmp_path / "referral_state.db")
    yield s
    await s.close()


class TestJsonFileStore:
    @pytest.mark.asyncio
    async def test_set_get_remove(self, json_path: Path) -> None:
        store = JsonFileStore(json_path)
        store.initialize()
        assert await store.get("pending_referral_code") is None
        await store.set("pending_referral_code", "ABC123")
        assert await store.get("pending_referral_code") == "ABC123"
        await store.remove("pending_referral_code")
        assert await store.get("pending_referral_code") is None

    @pytest.mark.asyncio
    async def test_survives_reopen(self, json_path: Path) -> None:
        first = JsonFileStore(json_path)
        first.initialize()
        await first.set("has_launched_before", "true")
        second = JsonFileStore(json_path)
        assert await second.get("has_launched_before") == "true"
        assert not json_path.with_name(json_path.name + ".tmp").exists()

    @pytest.mark.asyncio
    async def test_namespace_prefixes_keys(self, json_path: Path) -> None:
        store = JsonFileStore(json_path, namespace="app")
        await store.set("pending_referral_code", "ABC123")
        raw = json.loads(json_path.read_text(encoding="utf-8"))
        assert raw == {"app:pending_referral_code": "ABC123"}
        other = JsonFileStore(json_path)
        assert await other.get("pending_referral_code") is None

    @pytest.mark.asyncio
    async def test_corrupt_file_reads_empty(self, json_path: Path) -> None:
        json_path.parent.mkdir(parents=True)
        json_path.write_text("{broken", encoding="utf-8")
        store = JsonFileStore(json_path)
        assert await store.get("pending_referral_code") is None

    @pytest.mark.asyncio
    async def test_remove_missing_key_is_noop(self, json_path: Path) -> None:
        store = JsonFileStore(json_path)
        await store.remove("nothing")
        assert not json_path.exists()


class TestSqliteStore:
    @pytest.mark.asyncio
    async def test_set_overwrites(self, sqlite_store: SqliteStore) -> None:
        await sqlite_store.set("pending_referral_code", "ABC123")
        await sqlite_store.set("pending_referral_code", "XYZ789")
        assert await sqlite_store.get("pending_referral_code") == "XYZ789"

    @pytest.mark.asyncio
    async def test_remove(self, sqlite_store: SqliteStore) -> None:
        await sqlite_store.set("has_launched_before", "true")
        await sqlite_store.remove("has_launched_before")
        assert await sqlite_store.get("has_launched_before") is None
        await sqlite_store.remove("has_launched_before")

    @pytest.mark.asyncio
    async def test_survives_reopen(self, tmp_path: Path) -> None:
        db = tmp_path / "reopen.db"
        first = SqliteStore(db)
        await first.set("processed_referral_codes", '["ABC123"]')
        await first.close()
        second = SqliteStore(db)
        try:
            assert await second.get("processed_referral_codes") == '["ABC123"]'
        finally:
            await second.close()

    @pytest.mark.asyncio
    async def test_namespaces_are_isolated(self, tmp_path: Path) -> None:
        db = tmp_path / "ns.db"
        a = SqliteStore(db, namespace="a")
        b = SqliteStore(db, namespace="b")
        try:
            await a.set("pending_referral_code", "AAA111")
            assert await b.get("pending_referral_code") is None
        finally:
            await a.close()
            await b.close()


def test_adapters_satisfy_protocol(tmp_path: Path) -> None:
    assert isinstance(MemoryStore(), KeyValueStore)
    assert isinstance(JsonFileStore(tmp_path / "x.json"), KeyValueStore)
    assert isinstance(SqliteStore(tmp_path / "x.db"), KeyValueStore)
