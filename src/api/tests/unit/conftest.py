"""Unit test fixtures backed by the in-memory record store."""

from datetime import UTC, datetime

import pytest

from infrastructure.record_store import GuardedRecordStore, InMemoryRecordStore
from infrastructure.settings import RecordStoreSettings


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    """Provide a strongly-consistent in-memory store."""
    return InMemoryRecordStore()


@pytest.fixture
def store(memory_store: InMemoryRecordStore) -> GuardedRecordStore:
    """Provide the in-memory store behind the timeout guard, as in production."""
    return GuardedRecordStore(inner=memory_store, timeout_seconds=5.0)


@pytest.fixture
def store_settings() -> RecordStoreSettings:
    """Provide test record store settings."""
    return RecordStoreSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def workout_date():
    """Return a factory for workout dates on a fixed day in 2026."""

    def make(hour: int = 9, day: int = 1) -> datetime:
        return datetime(2026, 3, day, hour, 0, tzinfo=UTC)

    return make
