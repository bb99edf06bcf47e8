"""In-memory implementation of the RecordStore protocol.

Used for local development and tests. Lookups by id are always consistent
with the latest write. Queries can optionally be served from a replica that
only catches up when replicate() is called, which reproduces the
replication window of an eventually-consistent store deterministically.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, Sequence

from infrastructure.observability import DefaultRecordStoreProbe, RecordStoreProbe
from shared_kernel.record_store import Predicate, SortKey, StoredRecord


def _sort_value(value: Any) -> tuple[bool, Any]:
    """Sort missing values after present ones in ascending order."""
    return (value is None, value)


class InMemoryRecordStore:
    """Dictionary-backed record store.

    Args:
        eventually_consistent: When True, queries only see writes after
            replicate() has been called. Gets are never affected.
        probe: Optional domain probe for observability
    """

    backend = "memory"

    def __init__(
        self,
        eventually_consistent: bool = False,
        probe: RecordStoreProbe | None = None,
    ) -> None:
        self._records: dict[tuple[str, str], dict[str, Any]] = {}
        self._replica: dict[tuple[str, str], dict[str, Any]] = {}
        self._eventually_consistent = eventually_consistent
        self._probe = probe or DefaultRecordStoreProbe()

    def replicate(self) -> None:
        """Make every write so far visible to queries."""
        self._replica = copy.deepcopy(self._records)

    async def save(
        self, record_type: str, record_id: str, fields: Mapping[str, Any]
    ) -> None:
        key = (record_type, record_id)
        self._records[key] = copy.deepcopy(dict(fields))
        if not self._eventually_consistent:
            self._replica[key] = copy.deepcopy(dict(fields))
        self._probe.record_saved(record_type, record_id)

    async def delete(self, record_type: str, record_id: str) -> bool:
        key = (record_type, record_id)
        existed = self._records.pop(key, None) is not None
        if not self._eventually_consistent:
            self._replica.pop(key, None)
        self._probe.record_deleted(record_type, record_id, existed)
        return existed

    async def get(self, record_type: str, record_id: str) -> StoredRecord | None:
        fields = self._records.get((record_type, record_id))
        if fields is None:
            return None
        return StoredRecord(
            record_type=record_type, id=record_id, fields=copy.deepcopy(fields)
        )

    async def query(
        self,
        record_type: str,
        predicate: Predicate | None = None,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
    ) -> list[StoredRecord]:
        matches = [
            StoredRecord(record_type=rtype, id=rid, fields=copy.deepcopy(fields))
            for (rtype, rid), fields in self._replica.items()
            if rtype == record_type
            and (predicate is None or predicate.matches(fields))
        ]

        # Stable sorts applied from the least significant key
        for key in reversed(sort):
            matches.sort(
                key=lambda record: _sort_value(record.fields.get(key.field)),
                reverse=key.descending,
            )

        if limit is not None:
            matches = matches[:limit]

        self._probe.query_executed(record_type, len(matches))
        return matches

    async def close(self) -> None:
        self._probe.store_closed(self.backend)
