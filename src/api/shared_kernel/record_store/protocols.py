"""Record store protocol for the remote document store abstraction.

Defines the minimal interface the social graph needs from its backing store:
single-record writes and deletes, lookup by id, and predicate queries with
sort and limit. The store gives no cross-record transactions and queries may
be eventually consistent, so callers must treat every check-then-act sequence
as racy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from shared_kernel.record_store.predicates import Predicate, SortKey


@dataclass(frozen=True)
class StoredRecord:
    """A record as returned by the store.

    Attributes:
        record_type: The record type the record was stored under
        id: Record identifier, unique within its record type
        fields: JSON-compatible field values
    """

    record_type: str
    id: str
    fields: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class RecordStore(Protocol):
    """Protocol for record store implementations.

    Implementations must raise StoreUnavailableError for transport or backend
    failures. Timeouts are applied by GuardedRecordStore, which wraps any
    implementation.
    """

    async def save(
        self, record_type: str, record_id: str, fields: Mapping[str, Any]
    ) -> None:
        """Create or replace a record.

        Args:
            record_type: Record type (e.g., "UserProfile")
            record_id: Record identifier
            fields: Complete set of field values for the record

        Raises:
            StoreUnavailableError: If the write fails
        """
        ...

    async def delete(self, record_type: str, record_id: str) -> bool:
        """Delete a record.

        Returns:
            True if a record was deleted, False if it did not exist

        Raises:
            StoreUnavailableError: If the delete fails
        """
        ...

    async def get(self, record_type: str, record_id: str) -> StoredRecord | None:
        """Fetch a record by id.

        Returns:
            The record, or None if it does not exist

        Raises:
            StoreUnavailableError: If the read fails
        """
        ...

    async def query(
        self,
        record_type: str,
        predicate: Predicate | None = None,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
    ) -> list[StoredRecord]:
        """Query records of a type.

        Args:
            record_type: Record type to query
            predicate: Filter; None matches every record of the type
            sort: Sort keys applied in order
            limit: Maximum number of records to return

        Returns:
            Matching records in sort order

        Raises:
            StoreUnavailableError: If the query fails
        """
        ...
