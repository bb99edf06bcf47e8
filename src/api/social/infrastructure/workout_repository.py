"""Record store implementation of IPublicWorkoutRepository."""

from __future__ import annotations

from typing import Sequence

from shared_kernel.record_store import Eq, In, RecordStore, SortKey
from social.domain.aggregates import PublicWorkout
from social.domain.value_objects import ProfileId
from social.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from social.infrastructure.records import (
    WORKOUT_RECORD,
    decode_each,
    decode_workout,
    encode_workout,
)
from social.ports.exceptions import InvalidDataError
from social.ports.repositories import IPublicWorkoutRepository

_NEWEST_FIRST = (SortKey("date", descending=True),)


class PublicWorkoutRepository(IPublicWorkoutRepository):
    """Record-store-backed repository for shared workout snapshots."""

    def __init__(self, store: RecordStore, probe: RepositoryProbe | None = None):
        """Initialize repository with a record store and probe.

        Args:
            store: Record store to persist workouts in
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultRepositoryProbe()

    def _skip(self, error: InvalidDataError) -> None:
        self._probe.malformed_record_skipped(
            error.record_type, error.record_id, error.reason
        )

    async def save(self, workout: PublicWorkout) -> None:
        await self._store.save(
            WORKOUT_RECORD, workout.id.value, encode_workout(workout)
        )
        self._probe.aggregate_saved(WORKOUT_RECORD, workout.id.value)

    async def list_by_owners(
        self, owner_ids: Sequence[ProfileId], limit: int
    ) -> list[PublicWorkout]:
        if not owner_ids or limit <= 0:
            return []
        records = await self._store.query(
            WORKOUT_RECORD,
            In("userId", tuple(owner_id.value for owner_id in owner_ids)),
            sort=_NEWEST_FIRST,
            limit=limit,
        )
        return decode_each(records, decode_workout, self._skip)

    async def delete_by_owner(self, owner_id: ProfileId) -> int:
        records = await self._store.query(WORKOUT_RECORD, Eq("userId", owner_id.value))
        deleted = 0
        for record in records:
            existed = await self._store.delete(WORKOUT_RECORD, record.id)
            self._probe.aggregate_deleted(WORKOUT_RECORD, record.id, existed)
            deleted += int(existed)
        return deleted
