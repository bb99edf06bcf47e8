"""Record store implementations.

Concrete adapters for the RecordStore protocol defined in the shared kernel.
"""

from __future__ import annotations

from infrastructure.database.engines import create_store_engine
from infrastructure.observability import DefaultRecordStoreProbe, RecordStoreProbe
from infrastructure.record_store.guarded import GuardedRecordStore
from infrastructure.record_store.memory import InMemoryRecordStore
from infrastructure.record_store.sql import SqlRecordStore
from infrastructure.settings import RecordStoreSettings, StoreBackend


def create_record_store(
    settings: RecordStoreSettings,
    probe: RecordStoreProbe | None = None,
) -> GuardedRecordStore:
    """Build the configured record store wrapped with its timeout guard.

    Args:
        settings: Record store settings
        probe: Optional domain probe shared by the store and its guard

    Returns:
        GuardedRecordStore over the selected backend
    """
    probe = probe or DefaultRecordStoreProbe()
    if settings.backend == StoreBackend.SQL:
        inner: InMemoryRecordStore | SqlRecordStore = SqlRecordStore(
            engine=create_store_engine(settings), probe=probe
        )
    else:
        inner = InMemoryRecordStore(probe=probe)
    return GuardedRecordStore(
        inner=inner, timeout_seconds=settings.timeout_seconds, probe=probe
    )


__all__ = [
    "GuardedRecordStore",
    "InMemoryRecordStore",
    "SqlRecordStore",
    "create_record_store",
]
