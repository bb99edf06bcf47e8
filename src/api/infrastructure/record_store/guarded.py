"""Timeout enforcement for record store calls.

GuardedRecordStore wraps any RecordStore so that no call can hang: each
call runs under asyncio.timeout and surfaces as StoreTimeoutError when the
deadline passes. Cancellation from the caller propagates unchanged; a write
cancelled before the backend acknowledges it is either applied in full or
not at all, since every write is a single record.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Mapping, Sequence, TypeVar

from infrastructure.observability import DefaultRecordStoreProbe, RecordStoreProbe
from shared_kernel.record_store import (
    Predicate,
    RecordStore,
    SortKey,
    StoreTimeoutError,
    StoredRecord,
)

T = TypeVar("T")


class GuardedRecordStore:
    """RecordStore decorator applying a per-call timeout.

    Args:
        inner: The store to delegate to
        timeout_seconds: Deadline for every call
        probe: Optional domain probe for observability
    """

    def __init__(
        self,
        inner: RecordStore,
        timeout_seconds: float,
        probe: RecordStoreProbe | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self._inner = inner
        self._timeout_seconds = timeout_seconds
        self._probe = probe or DefaultRecordStoreProbe()

    @property
    def inner(self) -> RecordStore:
        return self._inner

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    def with_timeout(self, timeout_seconds: float) -> GuardedRecordStore:
        """Create a guard over the same store with a different deadline."""
        return GuardedRecordStore(
            inner=self._inner, timeout_seconds=timeout_seconds, probe=self._probe
        )

    async def _guard(
        self, operation: str, record_type: str, call: Awaitable[T]
    ) -> T:
        try:
            async with asyncio.timeout(self._timeout_seconds):
                return await call
        except TimeoutError as e:
            self._probe.call_timed_out(operation, record_type, self._timeout_seconds)
            raise StoreTimeoutError(
                f"{operation} on {record_type} exceeded {self._timeout_seconds}s"
            ) from e

    async def save(
        self, record_type: str, record_id: str, fields: Mapping[str, Any]
    ) -> None:
        await self._guard(
            "save", record_type, self._inner.save(record_type, record_id, fields)
        )

    async def delete(self, record_type: str, record_id: str) -> bool:
        return await self._guard(
            "delete", record_type, self._inner.delete(record_type, record_id)
        )

    async def get(self, record_type: str, record_id: str) -> StoredRecord | None:
        return await self._guard(
            "get", record_type, self._inner.get(record_type, record_id)
        )

    async def query(
        self,
        record_type: str,
        predicate: Predicate | None = None,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
    ) -> list[StoredRecord]:
        return await self._guard(
            "query",
            record_type,
            self._inner.query(record_type, predicate=predicate, sort=sort, limit=limit),
        )

    async def close(self) -> None:
        """Release the wrapped store's resources, if it holds any."""
        close = getattr(self._inner, "close", None)
        if close is not None:
            await close()
