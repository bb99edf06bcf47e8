"""Record store implementation of IProfileRepository."""

from __future__ import annotations

from shared_kernel.record_store import (
    Contains,
    Eq,
    RecordStore,
    SortKey,
    all_of,
    any_of,
)
from social.domain.aggregates import UserProfile
from social.domain.value_objects import ProfileId, Username
from social.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from social.infrastructure.records import (
    PROFILE_RECORD,
    decode_each,
    decode_profile,
    encode_profile,
    search_key,
)
from social.ports.exceptions import InvalidDataError
from social.ports.repositories import IProfileRepository

_BY_USERNAME = (SortKey("username"),)
_OLDEST_FIRST = (SortKey("createdAt"),)


class ProfileRepository(IProfileRepository):
    """Record-store-backed repository for UserProfile aggregates.

    Profiles are stored under their own id. Lookups by id read the latest
    write; username and search queries are eventually consistent.
    """

    def __init__(self, store: RecordStore, probe: RepositoryProbe | None = None):
        """Initialize repository with a record store and probe.

        Args:
            store: Record store to persist profiles in
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultRepositoryProbe()

    def _skip(self, error: InvalidDataError) -> None:
        self._probe.malformed_record_skipped(
            error.record_type, error.record_id, error.reason
        )

    async def save(self, profile: UserProfile) -> None:
        await self._store.save(
            PROFILE_RECORD, profile.id.value, encode_profile(profile)
        )
        self._probe.aggregate_saved(PROFILE_RECORD, profile.id.value)

    async def get_by_id(self, profile_id: ProfileId) -> UserProfile | None:
        record = await self._store.get(PROFILE_RECORD, profile_id.value)
        if record is None:
            self._probe.aggregate_not_found(PROFILE_RECORD, profile_id.value)
            return None
        return decode_profile(record)

    async def list_by_username(self, username: Username) -> list[UserProfile]:
        records = await self._store.query(
            PROFILE_RECORD,
            Eq("username", username.value),
            sort=_OLDEST_FIRST,
        )
        return decode_each(records, decode_profile, self._skip)

    async def search(
        self, text: str, exclude_id: ProfileId, limit: int
    ) -> list[UserProfile]:
        needle = search_key(text)
        predicate = all_of(
            Eq("isPublic", True),
            any_of(
                Contains("username", needle),
                Contains("displayNameSearch", needle),
            ),
        )
        # One extra row so excluding the caller still leaves ``limit`` results
        records = await self._store.query(
            PROFILE_RECORD, predicate, sort=_BY_USERNAME, limit=limit + 1
        )
        profiles = decode_each(records, decode_profile, self._skip)
        return [p for p in profiles if p.id != exclude_id][:limit]

    async def list_most_active(
        self, exclude_id: ProfileId, limit: int
    ) -> list[UserProfile]:
        records = await self._store.query(
            PROFILE_RECORD,
            Eq("isPublic", True),
            sort=(
                SortKey("totalWorkouts", descending=True, numeric=True),
                SortKey("username"),
            ),
            limit=limit + 1,
        )
        profiles = decode_each(records, decode_profile, self._skip)
        return [p for p in profiles if p.id != exclude_id][:limit]

    async def delete(self, profile_id: ProfileId) -> bool:
        existed = await self._store.delete(PROFILE_RECORD, profile_id.value)
        self._probe.aggregate_deleted(PROFILE_RECORD, profile_id.value, existed)
        return existed
