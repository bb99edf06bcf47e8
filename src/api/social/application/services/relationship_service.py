"""Relationship graph application service.

Owns FriendRelationship edges. Every mutation is a single-record write
against an eventually-consistent store, so existence checks before a write
are advisory: concurrent follows of the same pair can both pass the check.
Follow detects such duplicates after its own write and keeps the oldest
edge.
"""

from __future__ import annotations

from typing import Sequence

from social.application.fanout import gather_bounded
from social.application.observability import (
    DefaultRelationshipServiceProbe,
    RelationshipServiceProbe,
)
from social.application.services.privacy_service import PrivacyService
from social.application.value_objects import FollowOutcome, FollowResult, ListLimits
from social.domain.aggregates import FriendRelationship, UserProfile
from social.domain.privacy import FollowDecision, follow_decision
from social.domain.value_objects import ProfileId, RelationshipStatus
from social.ports.exceptions import (
    AlreadyFollowingError,
    FollowNotPermittedError,
    InvalidDataError,
    NotFollowingError,
    ProfileNotFoundError,
    RequestNotFoundError,
    SelfFollowError,
)
from social.ports.repositories import IProfileRepository, IRelationshipRepository


class RelationshipService:
    """Application service for the follow graph.

    Edges are directed (follower -> following). The simple follow flow
    creates accepted edges; targets whose follow permission requires
    approval receive pending edges they can accept or decline.
    """

    def __init__(
        self,
        relationship_repository: IRelationshipRepository,
        profile_repository: IProfileRepository,
        privacy_service: PrivacyService,
        fanout_concurrency: int = 8,
        limits: ListLimits | None = None,
        probe: RelationshipServiceProbe | None = None,
    ):
        """Initialize RelationshipService with dependencies.

        Args:
            relationship_repository: Repository for edge persistence
            profile_repository: Read access to profiles for existence checks
                and resolving adjacency lists
            privacy_service: Source of the target's follow permission
            fanout_concurrency: Maximum concurrent profile lookups
            limits: Maximum result count for explicitly limited lists
            probe: Optional domain probe for observability
        """
        self._relationships = relationship_repository
        self._profiles = profile_repository
        self._privacy = privacy_service
        self._fanout_concurrency = fanout_concurrency
        self._limits = limits or ListLimits()
        self._probe = probe or DefaultRelationshipServiceProbe()

    async def follow(
        self, follower_id: ProfileId, following_id: ProfileId
    ) -> FollowResult:
        """Follow another profile.

        Args:
            follower_id: Profile doing the following
            following_id: Profile to follow

        Returns:
            FollowResult with the surviving edge and how the call completed

        Raises:
            SelfFollowError: If both ids are equal (checked before any store call)
            ProfileNotFoundError: If the target profile does not exist
            AlreadyFollowingError: If an edge for the pair already exists
            FollowNotPermittedError: If the target's follow permission or a
                block forbids the follow
        """
        try:
            if follower_id == following_id:
                raise SelfFollowError("A profile cannot follow itself")

            if await self._profiles.get_by_id(following_id) is None:
                raise ProfileNotFoundError(following_id)

            existing = await self._relationships.list_between(follower_id, following_id)
            if any(edge.is_blocked for edge in existing):
                raise FollowNotPermittedError(
                    f"{follower_id} is blocked by {following_id}"
                )
            if existing:
                raise AlreadyFollowingError(
                    f"{follower_id} already follows {following_id}"
                )

            settings = await self._privacy.get_settings(following_id)
            match follow_decision(settings):
                case FollowDecision.ALLOW:
                    status = RelationshipStatus.ACCEPTED
                    outcome = FollowOutcome.FOLLOWED
                case FollowDecision.REQUIRE_APPROVAL:
                    status = RelationshipStatus.PENDING
                    outcome = FollowOutcome.PENDING_APPROVAL
                case FollowDecision.DENY:
                    raise FollowNotPermittedError(
                        f"{following_id} does not accept followers "
                        f"({settings.who_can_follow})"
                    )

            edge = FriendRelationship.create(follower_id, following_id, status)
            await self._relationships.save(edge)

            survivor, removed = await self._resolve_duplicates(edge)
            if removed:
                outcome = FollowOutcome.DUPLICATE_RESOLVED

            self._probe.followed(follower_id.value, following_id.value, outcome.value)
            return FollowResult(relationship=survivor, outcome=outcome)

        except Exception as e:
            self._probe.follow_failed(follower_id.value, following_id.value, str(e))
            raise

    async def _resolve_duplicates(
        self, created: FriendRelationship
    ) -> tuple[FriendRelationship, int]:
        """Keep the oldest edge for the pair and delete the rest.

        The query may not see our own write yet, so the created edge is
        always included in the candidates.
        """
        edges = await self._relationships.list_between(
            created.follower_id, created.following_id
        )
        candidates = {edge.id: edge for edge in edges}
        candidates[created.id] = created
        ordered = sorted(candidates.values(), key=FriendRelationship.sort_key)

        survivor, losers = ordered[0], ordered[1:]
        for loser in losers:
            await self._relationships.delete(loser.id)
        if losers:
            self._probe.duplicate_edges_resolved(
                created.follower_id.value, created.following_id.value, len(losers)
            )
        return survivor, len(losers)

    async def unfollow(self, follower_id: ProfileId, following_id: ProfileId) -> None:
        """Remove the follower's edge to a profile.

        Deletion is immediate and permanent. A pending request is withdrawn
        the same way. Blocks are not removed by the blocked follower.

        Raises:
            NotFollowingError: If no follow edge exists
        """
        edges = await self._relationships.list_between(follower_id, following_id)
        removable = [edge for edge in edges if not edge.is_blocked]
        if not removable:
            raise NotFollowingError(f"{follower_id} does not follow {following_id}")

        for edge in removable:
            await self._relationships.delete(edge.id)
        self._probe.unfollowed(follower_id.value, following_id.value)

    async def is_following(
        self, follower_id: ProfileId, following_id: ProfileId
    ) -> bool:
        """Whether an accepted edge exists. Absence is False, never an error."""
        if follower_id == following_id:
            return False
        edges = await self._relationships.list_between(follower_id, following_id)
        return any(edge.is_accepted for edge in edges)

    async def list_following(
        self, user_id: ProfileId, limit: int | None = None
    ) -> list[UserProfile]:
        """Profiles the user follows (accepted edges), in edge order."""
        edges = await self._relationships.list_by_follower(
            user_id, RelationshipStatus.ACCEPTED
        )
        ids = [edge.following_id for edge in edges]
        return await self._resolve_profiles(self._take(ids, limit))

    async def list_followers(
        self, user_id: ProfileId, limit: int | None = None
    ) -> list[UserProfile]:
        """Profiles following the user (accepted edges), in edge order."""
        edges = await self._relationships.list_by_following(
            user_id, RelationshipStatus.ACCEPTED
        )
        ids = [edge.follower_id for edge in edges]
        return await self._resolve_profiles(self._take(ids, limit))

    async def list_pending_requests(
        self, target_id: ProfileId, limit: int | None = None
    ) -> list[UserProfile]:
        """Profiles waiting for the target to approve their follow request."""
        edges = await self._relationships.list_by_following(
            target_id, RelationshipStatus.PENDING
        )
        ids = [edge.follower_id for edge in edges]
        return await self._resolve_profiles(self._take(ids, limit))

    def _take(
        self, ids: list[ProfileId], limit: int | None
    ) -> list[ProfileId]:
        """Apply a caller's limit; None keeps every id.

        Raises:
            ValueError: If the limit is negative
        """
        if limit is None:
            return ids
        return ids[: self._limits.clamp(limit, self._limits.maximum)]

    async def _resolve_profiles(self, ids: Sequence[ProfileId]) -> list[UserProfile]:
        """Fetch profiles concurrently, keeping input order.

        Edges pointing at deleted or malformed profiles are skipped.
        """
        unique_ids = list(dict.fromkeys(ids))

        async def fetch(profile_id: ProfileId) -> UserProfile | None:
            try:
                profile = await self._profiles.get_by_id(profile_id)
            except InvalidDataError as e:
                self._probe.profile_unresolved(profile_id.value, e.reason)
                return None
            if profile is None:
                self._probe.profile_unresolved(profile_id.value, "not found")
            return profile

        profiles = await gather_bounded(unique_ids, fetch, self._fanout_concurrency)
        return [profile for profile in profiles if profile is not None]

    async def _pending_edge(
        self, target_id: ProfileId, follower_id: ProfileId
    ) -> FriendRelationship:
        edges = await self._relationships.list_between(follower_id, target_id)
        for edge in edges:
            if edge.is_pending:
                return edge
        raise RequestNotFoundError(
            f"No pending follow request from {follower_id} to {target_id}"
        )

    async def accept_request(
        self, target_id: ProfileId, follower_id: ProfileId
    ) -> FriendRelationship:
        """Approve a pending follow request addressed to the target.

        Raises:
            RequestNotFoundError: If no pending request exists
        """
        edge = await self._pending_edge(target_id, follower_id)
        edge.accept()
        await self._relationships.save(edge)
        self._probe.follow_request_resolved(
            follower_id.value, target_id.value, accepted=True
        )
        return edge

    async def decline_request(
        self, target_id: ProfileId, follower_id: ProfileId
    ) -> None:
        """Reject a pending follow request; the edge is deleted.

        Raises:
            RequestNotFoundError: If no pending request exists
        """
        edge = await self._pending_edge(target_id, follower_id)
        await self._relationships.delete(edge.id)
        self._probe.follow_request_resolved(
            follower_id.value, target_id.value, accepted=False
        )

    async def block(
        self, target_id: ProfileId, follower_id: ProfileId
    ) -> FriendRelationship:
        """Block a profile from following the target.

        Any existing edge from the follower moves to blocked; otherwise a
        blocked edge is created so future follows are refused.

        Raises:
            SelfFollowError: If both ids are equal
            ProfileNotFoundError: If the profile to block does not exist
        """
        if target_id == follower_id:
            raise SelfFollowError("A profile cannot block itself")
        if await self._profiles.get_by_id(follower_id) is None:
            raise ProfileNotFoundError(follower_id)

        edges = await self._relationships.list_between(follower_id, target_id)
        if edges:
            edge, extras = edges[0], edges[1:]
            edge.block()
            await self._relationships.save(edge)
            for extra in extras:
                await self._relationships.delete(extra.id)
        else:
            edge = FriendRelationship.create(
                follower_id, target_id, RelationshipStatus.BLOCKED
            )
            await self._relationships.save(edge)

        self._probe.follower_blocked(target_id.value, follower_id.value)
        return edge

    async def unblock(self, target_id: ProfileId, follower_id: ProfileId) -> None:
        """Lift a block. The edge is deleted, not restored to its prior state.

        Raises:
            NotFollowingError: If the profile is not blocked by the target
        """
        edges = await self._relationships.list_between(follower_id, target_id)
        blocked = [edge for edge in edges if edge.is_blocked]
        if not blocked:
            raise NotFollowingError(f"{follower_id} is not blocked by {target_id}")

        for edge in blocked:
            await self._relationships.delete(edge.id)
        self._probe.follower_unblocked(target_id.value, follower_id.value)

    async def purge_profile(self, profile_id: ProfileId) -> None:
        """Delete every edge touching a profile (cascade from profile deletion)."""
        outgoing = await self._relationships.list_by_follower(profile_id)
        incoming = await self._relationships.list_by_following(profile_id)
        edge_ids = list(dict.fromkeys(edge.id for edge in [*outgoing, *incoming]))

        removed = 0
        for edge_id in edge_ids:
            removed += int(await self._relationships.delete(edge_id))
        self._probe.relationships_purged(profile_id.value, removed)
