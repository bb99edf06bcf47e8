"""Record store shared kernel module."""

from shared_kernel.record_store.exceptions import (
    RecordStoreError,
    StoreTimeoutError,
    StoreUnavailableError,
)
from shared_kernel.record_store.predicates import (
    And,
    Contains,
    Eq,
    In,
    Or,
    Predicate,
    SortKey,
    StartsWith,
    all_of,
    any_of,
)
from shared_kernel.record_store.protocols import RecordStore, StoredRecord

__all__ = [
    "And",
    "Contains",
    "Eq",
    "In",
    "Or",
    "Predicate",
    "RecordStore",
    "RecordStoreError",
    "SortKey",
    "StartsWith",
    "StoreTimeoutError",
    "StoreUnavailableError",
    "StoredRecord",
    "all_of",
    "any_of",
]
