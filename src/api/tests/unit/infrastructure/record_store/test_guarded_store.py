"""Unit tests for GuardedRecordStore."""

import asyncio
from unittest.mock import AsyncMock, create_autospec

import pytest

from infrastructure.observability import RecordStoreProbe
from infrastructure.record_store import GuardedRecordStore, InMemoryRecordStore
from shared_kernel.record_store import StoreTimeoutError, StoreUnavailableError


class SlowStore(InMemoryRecordStore):
    """In-memory store whose queries take longer than any test deadline."""

    async def query(self, *args, **kwargs):
        await asyncio.sleep(5)
        return await super().query(*args, **kwargs)


@pytest.fixture
def mock_probe():
    return create_autospec(RecordStoreProbe, instance=True)


class TestTimeouts:
    @pytest.mark.asyncio
    async def test_slow_call_becomes_store_timeout(self, mock_probe):
        store = GuardedRecordStore(
            inner=SlowStore(), timeout_seconds=0.01, probe=mock_probe
        )

        with pytest.raises(StoreTimeoutError, match="query on Note"):
            await store.query("Note")

        mock_probe.call_timed_out.assert_called_once_with("query", "Note", 0.01)

    @pytest.mark.asyncio
    async def test_fast_calls_pass_through(self, store, memory_store):
        await store.save("Note", "1", {"v": 1})

        assert (await memory_store.get("Note", "1")).fields == {"v": 1}
        assert [r.id for r in await store.query("Note")] == ["1"]
        assert await store.delete("Note", "1") is True

    @pytest.mark.asyncio
    async def test_backend_errors_are_not_rewrapped(self):
        inner = AsyncMock()
        inner.get.side_effect = StoreUnavailableError("down")
        store = GuardedRecordStore(inner=inner, timeout_seconds=1)

        with pytest.raises(StoreUnavailableError):
            await store.get("Note", "1")

    def test_timeout_must_be_positive(self, memory_store):
        with pytest.raises(ValueError):
            GuardedRecordStore(inner=memory_store, timeout_seconds=0)

    def test_with_timeout_keeps_inner_store(self, store, memory_store):
        faster = store.with_timeout(0.5)
        assert faster.inner is memory_store
        assert faster.timeout_seconds == 0.5


class TestClose:
    @pytest.mark.asyncio
    async def test_close_delegates_to_inner(self):
        inner = AsyncMock()
        store = GuardedRecordStore(inner=inner, timeout_seconds=1)

        await store.close()

        inner.close.assert_awaited_once()
