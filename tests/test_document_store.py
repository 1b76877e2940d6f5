"""Tests for the JSON-file and Supabase document stores."""

from __future__ import annotations

import asyncio
import json
import os
from typing import Any, Dict, List, Optional

import pytest
from postgrest.exceptions import APIError

from rosterwatch.storage.document_store import JsonFileStore, StorageError
from rosterwatch.storage.supabase_client import SupabaseDocumentStore


# ── JsonFileStore ─────────────────────────────────────────────────────────────


def test_prepare_creates_data_dir(json_store) -> None:
    asyncio.run(json_store.prepare())
    assert os.path.isdir(json_store.data_dir)


def test_missing_key_returns_copy_of_default(json_store) -> None:
    asyncio.run(json_store.prepare())
    default: List[Any] = []
    loaded = asyncio.run(json_store.load("updates", default))
    loaded.append("x")
    assert default == []


def test_save_then_load(json_store) -> None:
    asyncio.run(json_store.prepare())
    asyncio.run(json_store.save("emea", [{"team": "Team A"}]))
    assert asyncio.run(json_store.load("emea", [])) == [{"team": "Team A"}]


def test_save_writes_pretty_json_without_leftovers(json_store) -> None:
    asyncio.run(json_store.prepare())
    asyncio.run(json_store.save("update_messages", [{"message": "Ünïcode"}]))
    path = json_store.path_for("update_messages")
    with open(path, encoding="utf-8") as f:
        text = f.read()
    assert text == json.dumps([{"message": "Ünïcode"}], indent=2, ensure_ascii=False)
    assert os.listdir(json_store.data_dir) == ["update_messages.json"]


def test_save_overwrites_whole_document(json_store) -> None:
    asyncio.run(json_store.prepare())
    asyncio.run(json_store.save("emea", [1, 2, 3]))
    asyncio.run(json_store.save("emea", [4]))
    assert asyncio.run(json_store.load("emea", [])) == [4]


def test_corrupt_file_raises_storage_error(json_store) -> None:
    asyncio.run(json_store.prepare())
    with open(json_store.path_for("emea"), "w", encoding="utf-8") as f:
        f.write("{not json")
    with pytest.raises(StorageError):
        asyncio.run(json_store.load("emea", []))


def test_prepare_fails_when_path_is_a_file(tmp_path) -> None:
    blocker = tmp_path / "data"
    blocker.write_text("occupied")
    with pytest.raises(StorageError):
        asyncio.run(JsonFileStore(str(blocker)).prepare())


# ── SupabaseDocumentStore ─────────────────────────────────────────────────────


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]) -> None:
        self.data = data


class FakeQuery:
    """Records the chained calls of one postgrest query."""

    def __init__(self, table: "FakeTable") -> None:
        self.table = table
        self.filters: Dict[str, Any] = {}
        self.upserted: Optional[Dict[str, Any]] = None

    def select(self, *columns: str) -> "FakeQuery":
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters[column] = value
        return self

    def limit(self, count: int) -> "FakeQuery":
        return self

    def upsert(self, row: Dict[str, Any]) -> "FakeQuery":
        self.upserted = row
        return self

    async def execute(self) -> FakeResponse:
        if self.table.error:
            raise self.table.error
        if self.upserted is not None:
            self.table.rows[self.upserted["key"]] = self.upserted
            return FakeResponse([self.upserted])
        row = self.table.rows.get(self.filters.get("key"))
        return FakeResponse([{"body": row["body"]}] if row else [])


class FakeTable:
    def __init__(self) -> None:
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.error: Optional[Exception] = None


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: Dict[str, FakeTable] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, FakeTable()))


def test_supabase_missing_key_returns_default() -> None:
    store = SupabaseDocumentStore(FakeSupabase(), table="documents")
    assert asyncio.run(store.load("emea", [])) == []


def test_supabase_save_upserts_key_and_body() -> None:
    client = FakeSupabase()
    store = SupabaseDocumentStore(client, table="documents")
    asyncio.run(store.save("emea", [{"team": "Team A"}]))
    asyncio.run(store.save("emea", [{"team": "Team B"}]))
    assert client.tables["documents"].rows == {
        "emea": {"key": "emea", "body": [{"team": "Team B"}]}
    }
    assert asyncio.run(store.load("emea", [])) == [{"team": "Team B"}]


def test_supabase_api_error_becomes_storage_error() -> None:
    client = FakeSupabase()
    client.table("documents").table.error = APIError(
        {"message": "permission denied", "code": "42501", "hint": None, "details": None}
    )
    store = SupabaseDocumentStore(client, table="documents")
    with pytest.raises(StorageError, match="permission denied"):
        asyncio.run(store.load("emea", []))
    with pytest.raises(StorageError):
        asyncio.run(store.save("emea", []))


def test_save_lets_other_tasks_run(json_store) -> None:
    """Writing a document yields to the loop, so queued sends can start."""
    progress: List[str] = []

    async def background() -> None:
        progress.append("ran")

    async def run() -> List[str]:
        await json_store.prepare()
        task = asyncio.create_task(background())
        await json_store.save("updates", [{"region": "EMEA"}])
        seen = list(progress)
        await task
        return seen

    assert asyncio.run(run()) == ["ran"]
