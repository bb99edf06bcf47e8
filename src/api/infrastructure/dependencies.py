"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources (the record store).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

from infrastructure.record_store import GuardedRecordStore, create_record_store
from infrastructure.settings import get_record_store_settings


@lru_cache
def get_record_store() -> GuardedRecordStore:
    """Get application-scoped record store (singleton).

    The store is shared across all requests; each call opens its own
    session against the backend.

    Returns:
        GuardedRecordStore over the configured backend.
    """
    return create_record_store(get_record_store_settings())
