"""Tests for the alias table and its document stores."""

from __future__ import annotations

import asyncio
import json
import logging
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from sticker_hook.aliases.store import DEFAULT_DOCUMENT_ID, InMemoryAliasStore, RedisAliasStore
from sticker_hook.aliases.table import MAX_ALIAS_LENGTH, AliasTable, sanitize_alias
from sticker_hook.core.exceptions import PersistenceError

from conftest import EXPLORER_ID, SWARM_PIN_ID


# =====================================================================
# sanitize_alias
# =====================================================================


class TestSanitize:
    def test_strips_and_lowercases(self):
        assert sanitize_alias("  Foo Bar  ") == "foo bar"

    def test_truncates_to_80_characters(self):
        assert sanitize_alias("x" * 200) == "x" * MAX_ALIAS_LENGTH
        assert MAX_ALIAS_LENGTH == 80

    def test_truncates_after_stripping(self):
        assert sanitize_alias("   " + "Y" * 81) == "y" * 80

    def test_table_exposes_sanitize(self):
        assert AliasTable.sanitize(" ABC ") == "abc"


# =====================================================================
# AliasTable mutations
# =====================================================================


class TestAliasTableAdd:
    @pytest.mark.asyncio
    async def test_add_returns_sanitized_alias(self, aliases):
        assert await aliases.add(EXPLORER_ID, "  Foo Bar  ") == "foo bar"
        assert aliases.aliases_for(EXPLORER_ID) == ["foo bar"]

    @pytest.mark.asyncio
    async def test_add_twice_stores_one_copy(self, aliases):
        await aliases.add(EXPLORER_ID, "foo")
        await aliases.add(EXPLORER_ID, "foo")
        assert aliases.aliases_for(EXPLORER_ID) == ["foo"]
        assert aliases.size == 1

    @pytest.mark.asyncio
    async def test_newest_alias_first(self, aliases):
        await aliases.add(EXPLORER_ID, "one")
        await aliases.add(EXPLORER_ID, "two")
        await aliases.add(EXPLORER_ID, "one")
        assert aliases.aliases_for(EXPLORER_ID) == ["one", "two"]

    @pytest.mark.asyncio
    async def test_aliases_for_unknown_id_is_empty(self, aliases):
        assert aliases.aliases_for(SWARM_PIN_ID) == []

    @pytest.mark.asyncio
    async def test_aliases_for_returns_copy(self, aliases):
        await aliases.add(EXPLORER_ID, "foo")
        aliases.aliases_for(EXPLORER_ID).append("bar")
        assert aliases.aliases_for(EXPLORER_ID) == ["foo"]


class TestAliasTableRemove:
    @pytest.mark.asyncio
    async def test_remove_existing_alias(self, aliases):
        await aliases.add(EXPLORER_ID, "foo")
        await aliases.add(EXPLORER_ID, "bar")
        assert await aliases.remove("  FOO ") is True
        assert aliases.aliases_for(EXPLORER_ID) == ["bar"]

    @pytest.mark.asyncio
    async def test_removing_last_alias_deletes_sticker_entry(self, aliases):
        await aliases.add(EXPLORER_ID, "foo")
        assert await aliases.remove("foo") is True
        assert EXPLORER_ID not in aliases
        assert aliases.to_document() == {}

    @pytest.mark.asyncio
    async def test_remove_unknown_alias_returns_false_and_changes_nothing(self, aliases, alias_store):
        await aliases.add(EXPLORER_ID, "foo")
        await aliases.flush()
        before = aliases.to_document()
        saves = alias_store.save_count

        assert await aliases.remove("nope") is False
        await aliases.flush()

        assert aliases.to_document() == before
        assert alias_store.save_count == saves

    @pytest.mark.asyncio
    async def test_remove_on_empty_table(self):
        assert await AliasTable().remove("anything") is False

    @pytest.mark.asyncio
    async def test_remove_takes_first_owner_in_table_order(self, aliases):
        await aliases.add(SWARM_PIN_ID, "shared")
        await aliases.add(EXPLORER_ID, "shared")
        assert await aliases.remove("shared") is True
        assert SWARM_PIN_ID not in aliases
        assert aliases.aliases_for(EXPLORER_ID) == ["shared"]


class TestReverseLookup:
    @pytest.mark.asyncio
    async def test_finds_owner(self, aliases):
        await aliases.add(EXPLORER_ID, "foo")
        assert aliases.reverse_lookup("foo") == EXPLORER_ID

    @pytest.mark.asyncio
    async def test_sanitizes_query(self, aliases):
        await aliases.add(EXPLORER_ID, "foo bar")
        assert aliases.reverse_lookup("  FOO Bar ") == EXPLORER_ID

    @pytest.mark.asyncio
    async def test_unknown_alias(self, aliases):
        assert aliases.reverse_lookup("missing") is None

    @pytest.mark.asyncio
    async def test_ambiguous_alias_resolves_to_first_sticker_added(self, aliases):
        await aliases.add(SWARM_PIN_ID, "shared")
        await aliases.add(EXPLORER_ID, "shared")
        assert aliases.reverse_lookup("shared") == SWARM_PIN_ID


# =====================================================================
# Persistence
# =====================================================================


class TestAliasPersistence:
    @pytest.mark.asyncio
    async def test_mutation_writes_whole_document(self, aliases, alias_store):
        await aliases.add(EXPLORER_ID, "foo")
        await aliases.add(SWARM_PIN_ID, "pin")
        await aliases.flush()
        assert alias_store.document == {EXPLORER_ID: ["foo"], SWARM_PIN_ID: ["pin"]}

    @pytest.mark.asyncio
    async def test_remove_writes_document(self, aliases, alias_store):
        await aliases.add(EXPLORER_ID, "foo")
        await aliases.remove("foo")
        await aliases.flush()
        assert alias_store.document == {}

    @pytest.mark.asyncio
    async def test_add_returns_before_write_completes(self):
        gate = asyncio.Event()
        written: list[dict] = []
        store = AsyncMock()

        async def slow_save(document):
            await gate.wait()
            written.append(document)

        store.save.side_effect = slow_save
        table = AliasTable(store=store)

        await table.add(EXPLORER_ID, "foo")
        await asyncio.sleep(0)
        assert table.aliases_for(EXPLORER_ID) == ["foo"]
        assert written == []

        gate.set()
        await table.flush()
        assert written == [{EXPLORER_ID: ["foo"]}]

    @pytest.mark.asyncio
    async def test_failed_write_keeps_memory_change(self, caplog):
        store = AsyncMock()
        store.save.side_effect = PersistenceError(DEFAULT_DOCUMENT_ID, "redis down")
        table = AliasTable(store=store)

        with caplog.at_level(logging.WARNING):
            await table.add(EXPLORER_ID, "foo")
            await table.flush()

        assert table.aliases_for(EXPLORER_ID) == ["foo"]
        assert table.persist_failures == 1
        assert "redis down" in caplog.text

    @pytest.mark.asyncio
    async def test_without_store_mutates_in_memory_and_warns(self, caplog):
        table = AliasTable()
        with caplog.at_level(logging.WARNING):
            await table.add(EXPLORER_ID, "foo")
        assert table.aliases_for(EXPLORER_ID) == ["foo"]
        assert not table.persistent
        assert "not getting persisted" in caplog.text

    @pytest.mark.asyncio
    async def test_concurrent_adds_are_all_kept(self, aliases, alias_store):
        names = [f"alias{i}" for i in range(50)]
        await asyncio.gather(*(aliases.add(EXPLORER_ID, name) for name in names))
        await aliases.flush()

        assert sorted(aliases.aliases_for(EXPLORER_ID)) == sorted(names)
        assert sorted(alias_store.document[EXPLORER_ID]) == sorted(names)

    @pytest.mark.asyncio
    async def test_concurrent_add_and_remove_across_stickers(self, aliases, alias_store):
        await aliases.add(SWARM_PIN_ID, "pin")
        await asyncio.gather(
            *(aliases.add(EXPLORER_ID, f"e{i}") for i in range(25)),
            aliases.remove("pin"),
        )
        await aliases.flush()

        assert alias_store.document == {EXPLORER_ID: aliases.aliases_for(EXPLORER_ID)}
        assert len(alias_store.document[EXPLORER_ID]) == 25

    @pytest.mark.asyncio
    async def test_last_write_reflects_latest_state(self, aliases, alias_store):
        for name in ("a", "b", "c"):
            await aliases.add(EXPLORER_ID, name)
        await aliases.remove("b")
        await aliases.flush()
        assert alias_store.document == {EXPLORER_ID: ["c", "a"]}


class TestAliasLoad:
    @pytest.mark.asyncio
    async def test_load_populates_table(self):
        store = InMemoryAliasStore({EXPLORER_ID: ["foo", "bar"], SWARM_PIN_ID: ["pin"]})
        table = AliasTable(store=store)
        assert await table.load() == 3
        assert table.aliases_for(EXPLORER_ID) == ["foo", "bar"]
        assert table.reverse_lookup("pin") == SWARM_PIN_ID

    @pytest.mark.asyncio
    async def test_load_drops_non_alias_fields(self):
        store = InMemoryAliasStore(
            {"_id": DEFAULT_DOCUMENT_ID, EXPLORER_ID: ["foo", 3, "foo"], SWARM_PIN_ID: []}
        )
        table = AliasTable(store=store)
        await table.load()
        assert table.to_document() == {EXPLORER_ID: ["foo"]}

    @pytest.mark.asyncio
    async def test_load_without_document(self, aliases):
        assert await aliases.load() == 0
        assert len(aliases) == 0

    @pytest.mark.asyncio
    async def test_load_failure_leaves_table_empty(self):
        store = AsyncMock()
        store.load.side_effect = PersistenceError(DEFAULT_DOCUMENT_ID, "unreachable")
        table = AliasTable(store=store)
        assert await table.load() == 0
        assert table.to_document() == {}

    @pytest.mark.asyncio
    async def test_load_without_store(self):
        assert await AliasTable().load() == 0


# =====================================================================
# RedisAliasStore
# =====================================================================


class TestRedisAliasStore:
    @pytest.fixture
    def client(self):
        return AsyncMock()

    @pytest.mark.asyncio
    async def test_key_uses_document_id(self, client):
        store = RedisAliasStore(client)
        assert store.document_id == DEFAULT_DOCUMENT_ID
        assert store.key == f"sticker_hook:aliases:{DEFAULT_DOCUMENT_ID}"

    @pytest.mark.asyncio
    async def test_save_writes_json_document(self, client):
        store = RedisAliasStore(client, document_id="doc")
        await store.save({EXPLORER_ID: ["foo"]})
        key, payload = client.set.await_args.args
        assert key == "sticker_hook:aliases:doc"
        assert json.loads(payload) == {EXPLORER_ID: ["foo"]}

    @pytest.mark.asyncio
    async def test_load_returns_document(self, client):
        client.get.return_value = json.dumps({EXPLORER_ID: ["foo"]})
        assert await RedisAliasStore(client).load() == {EXPLORER_ID: ["foo"]}

    @pytest.mark.asyncio
    async def test_load_missing_key(self, client):
        client.get.return_value = None
        assert await RedisAliasStore(client).load() is None

    @pytest.mark.asyncio
    async def test_load_corrupt_json_raises(self, client):
        client.get.return_value = "{not json"
        with pytest.raises(PersistenceError):
            await RedisAliasStore(client).load()

    @pytest.mark.asyncio
    async def test_load_non_object_raises(self, client):
        client.get.return_value = "[1, 2]"
        with pytest.raises(PersistenceError):
            await RedisAliasStore(client).load()

    @pytest.mark.asyncio
    async def test_redis_errors_become_persistence_errors(self, client):
        client.set.side_effect = RedisConnectionError("refused")
        client.get.side_effect = RedisConnectionError("refused")
        store = RedisAliasStore(client)
        with pytest.raises(PersistenceError, match="refused"):
            await store.save({})
        with pytest.raises(PersistenceError, match="refused"):
            await store.load()

    @pytest.mark.asyncio
    async def test_close(self, client):
        await RedisAliasStore(client).close()
        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_table_round_trip_through_redis_store(self, client):
        saved: dict[str, str] = {}

        async def fake_set(key, value):
            saved[key] = value

        async def fake_get(key):
            return saved.get(key)

        client.set.side_effect = fake_set
        client.get.side_effect = fake_get

        table = AliasTable(store=RedisAliasStore(client))
        await table.add(EXPLORER_ID, "Foo")
        await table.flush()

        restored = AliasTable(store=RedisAliasStore(client))
        await restored.load()
        assert restored.reverse_lookup("foo") == EXPLORER_ID
