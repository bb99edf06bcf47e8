"""Integration test fixtures for the PostgreSQL record store.

These fixtures require a running PostgreSQL instance; tests are skipped when
the database cannot be reached. Use docker-compose for testing.
"""

import os
from uuid import uuid4

import pytest
import pytest_asyncio
from pydantic import SecretStr

from infrastructure.database import create_store_engine
from infrastructure.record_store import GuardedRecordStore, SqlRecordStore
from infrastructure.settings import RecordStoreSettings
from shared_kernel.record_store import StoreUnavailableError


@pytest.fixture(scope="session")
def integration_store_settings() -> RecordStoreSettings:
    """Record store settings for integration tests.

    Override with environment variables:
        SOCIAL_STORE_HOST, SOCIAL_STORE_PORT, etc.
    """
    return RecordStoreSettings(
        backend="sql",
        host=os.getenv("SOCIAL_STORE_HOST", "localhost"),
        port=int(os.getenv("SOCIAL_STORE_PORT", "5432")),
        database=os.getenv("SOCIAL_STORE_DATABASE", "social"),
        username=os.getenv("SOCIAL_STORE_USERNAME", "social"),
        password=SecretStr(os.getenv("SOCIAL_STORE_PASSWORD", "social_dev_password")),
        pool_max_connections=4,
    )


@pytest_asyncio.fixture
async def pg_store(integration_store_settings):
    """Provide a guarded PostgreSQL store with the records table in place.

    Each test writes under its own record type suffix, so runs never see
    each other's records.
    """
    inner = SqlRecordStore(create_store_engine(integration_store_settings))
    try:
        await inner.create_schema()
    except StoreUnavailableError as e:
        await inner.close()
        pytest.skip(f"PostgreSQL not reachable: {e}")

    yield GuardedRecordStore(inner=inner, timeout_seconds=5)
    await inner.close()


@pytest.fixture
def record_type() -> str:
    return f"Test_{uuid4().hex[:12]}"
