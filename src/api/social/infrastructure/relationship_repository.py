"""Record store implementation of IRelationshipRepository."""

from __future__ import annotations

from shared_kernel.record_store import Eq, Predicate, RecordStore, SortKey, all_of
from social.domain.aggregates import FriendRelationship
from social.domain.value_objects import ProfileId, RelationshipId, RelationshipStatus
from social.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from social.infrastructure.records import (
    RELATIONSHIP_RECORD,
    decode_each,
    decode_relationship,
    encode_relationship,
)
from social.ports.exceptions import InvalidDataError
from social.ports.repositories import IRelationshipRepository

_OLDEST_FIRST = (SortKey("createdAt"),)


class RelationshipRepository(IRelationshipRepository):
    """Record-store-backed repository for follow edges.

    Every edge is its own record, so follow and unfollow are single-record
    writes. Adjacency lists are queries over the follower or following
    field and are eventually consistent.
    """

    def __init__(self, store: RecordStore, probe: RepositoryProbe | None = None):
        """Initialize repository with a record store and probe.

        Args:
            store: Record store to persist edges in
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultRepositoryProbe()

    def _skip(self, error: InvalidDataError) -> None:
        self._probe.malformed_record_skipped(
            error.record_type, error.record_id, error.reason
        )

    async def _query(self, predicate: Predicate) -> list[FriendRelationship]:
        records = await self._store.query(
            RELATIONSHIP_RECORD, predicate, sort=_OLDEST_FIRST
        )
        edges = decode_each(records, decode_relationship, self._skip)
        # Ties on created_at are broken by id so every reader agrees on order
        return sorted(edges, key=FriendRelationship.sort_key)

    async def save(self, relationship: FriendRelationship) -> None:
        await self._store.save(
            RELATIONSHIP_RECORD,
            relationship.id.value,
            encode_relationship(relationship),
        )
        self._probe.aggregate_saved(RELATIONSHIP_RECORD, relationship.id.value)

    async def delete(self, relationship_id: RelationshipId) -> bool:
        existed = await self._store.delete(RELATIONSHIP_RECORD, relationship_id.value)
        self._probe.aggregate_deleted(
            RELATIONSHIP_RECORD, relationship_id.value, existed
        )
        return existed

    async def list_between(
        self, follower_id: ProfileId, following_id: ProfileId
    ) -> list[FriendRelationship]:
        return await self._query(
            all_of(
                Eq("followerId", follower_id.value),
                Eq("followingId", following_id.value),
            )
        )

    async def list_by_follower(
        self,
        follower_id: ProfileId,
        status: RelationshipStatus | None = None,
    ) -> list[FriendRelationship]:
        predicate: Predicate = Eq("followerId", follower_id.value)
        if status is not None:
            predicate = all_of(predicate, Eq("status", status.value))
        return await self._query(predicate)

    async def list_by_following(
        self,
        following_id: ProfileId,
        status: RelationshipStatus | None = None,
    ) -> list[FriendRelationship]:
        predicate: Predicate = Eq("followingId", following_id.value)
        if status is not None:
            predicate = all_of(predicate, Eq("status", status.value))
        return await self._query(predicate)
