"""Unit tests for InMemoryRecordStore."""

import pytest

from infrastructure.record_store import InMemoryRecordStore
from shared_kernel.record_store import Eq, RecordStore, SortKey


class TestBasicOperations:
    def test_implements_protocol(self, memory_store):
        assert isinstance(memory_store, RecordStore)

    @pytest.mark.asyncio
    async def test_save_replaces_whole_record(self, memory_store):
        await memory_store.save("Note", "1", {"a": 1, "b": 2})
        await memory_store.save("Note", "1", {"a": 3})

        record = await memory_store.get("Note", "1")

        assert record.fields == {"a": 3}

    @pytest.mark.asyncio
    async def test_returned_fields_are_copies(self, memory_store):
        await memory_store.save("Note", "1", {"tags": ["x"]})

        record = await memory_store.get("Note", "1")
        record.fields["tags"].append("y")

        assert (await memory_store.get("Note", "1")).fields == {"tags": ["x"]}

    @pytest.mark.asyncio
    async def test_record_types_are_separate_namespaces(self, memory_store):
        await memory_store.save("Note", "1", {"v": "note"})
        await memory_store.save("Task", "1", {"v": "task"})

        notes = await memory_store.query("Note")

        assert [r.fields["v"] for r in notes] == ["note"]

    @pytest.mark.asyncio
    async def test_delete_reports_existence(self, memory_store):
        await memory_store.save("Note", "1", {})
        assert await memory_store.delete("Note", "1") is True
        assert await memory_store.delete("Note", "1") is False
        assert await memory_store.get("Note", "1") is None


class TestQuery:
    @pytest.mark.asyncio
    async def test_multi_key_sort_and_limit(self, memory_store):
        await memory_store.save("W", "1", {"owner": "a", "date": "2026-03-02"})
        await memory_store.save("W", "2", {"owner": "b", "date": "2026-03-03"})
        await memory_store.save("W", "3", {"owner": "a", "date": "2026-03-01"})
        await memory_store.save("W", "4", {"owner": "b", "date": "2026-03-01"})

        records = await memory_store.query(
            "W",
            sort=[SortKey("owner"), SortKey("date", descending=True)],
            limit=3,
        )

        assert [r.id for r in records] == ["1", "3", "2"]

    @pytest.mark.asyncio
    async def test_missing_sort_field_sorts_last(self, memory_store):
        await memory_store.save("P", "1", {})
        await memory_store.save("P", "2", {"n": 5})

        records = await memory_store.query("P", sort=[SortKey("n", numeric=True)])

        assert [r.id for r in records] == ["2", "1"]

    @pytest.mark.asyncio
    async def test_predicate_filters(self, memory_store):
        await memory_store.save("P", "1", {"name": "alice"})
        await memory_store.save("P", "2", {"name": "bob"})

        records = await memory_store.query("P", predicate=Eq("name", "bob"))

        assert [r.id for r in records] == ["2"]


class TestEventualConsistency:
    """Queries lag writes until replicate(); gets never do."""

    @pytest.mark.asyncio
    async def test_queries_see_writes_only_after_replicate(self):
        store = InMemoryRecordStore(eventually_consistent=True)
        await store.save("P", "1", {"name": "alice"})

        assert await store.get("P", "1") is not None
        assert await store.query("P") == []

        store.replicate()

        assert [r.id for r in await store.query("P")] == ["1"]

    @pytest.mark.asyncio
    async def test_deletes_lag_in_queries(self):
        store = InMemoryRecordStore(eventually_consistent=True)
        await store.save("P", "1", {})
        store.replicate()

        await store.delete("P", "1")

        assert await store.get("P", "1") is None
        assert len(await store.query("P")) == 1
        store.replicate()
        assert await store.query("P") == []
