"""Repository protocols (ports) for the social bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations map each aggregate to a single record in the
record store, which offers single-record atomic writes and eventually
consistent queries only.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from social.domain.aggregates import (
    FriendRelationship,
    PublicWorkout,
    SocialPrivacySettings,
    UserProfile,
)
from social.domain.value_objects import (
    ProfileId,
    RelationshipId,
    RelationshipStatus,
    Username,
)


@runtime_checkable
class IProfileRepository(Protocol):
    """Repository for UserProfile aggregate persistence."""

    async def save(self, profile: UserProfile) -> None:
        """Persist a profile aggregate.

        Creates a new profile or overwrites an existing one.

        Args:
            profile: The UserProfile aggregate to persist
        """
        ...

    async def get_by_id(self, profile_id: ProfileId) -> UserProfile | None:
        """Retrieve a profile by its ID.

        Args:
            profile_id: The unique identifier of the profile

        Returns:
            The UserProfile aggregate, or None if not found

        Raises:
            InvalidDataError: If the stored record is malformed
        """
        ...

    async def list_by_username(self, username: Username) -> list[UserProfile]:
        """List every profile carrying a case-folded username.

        More than one result means a registration race slipped past the
        uniqueness check. Results are ordered oldest first.

        Args:
            username: Canonical username

        Returns:
            Matching profiles, possibly empty
        """
        ...

    async def search(
        self, text: str, exclude_id: ProfileId, limit: int
    ) -> list[UserProfile]:
        """Case-insensitive substring search over username and display name.

        Only public profiles are returned, ordered by username ascending.

        Args:
            text: Search text
            exclude_id: Profile to leave out (the caller)
            limit: Maximum number of results

        Returns:
            Matching profiles
        """
        ...

    async def list_most_active(
        self, exclude_id: ProfileId, limit: int
    ) -> list[UserProfile]:
        """List public profiles ordered by total workouts, highest first."""
        ...

    async def delete(self, profile_id: ProfileId) -> bool:
        """Delete a profile record.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IRelationshipRepository(Protocol):
    """Repository for FriendRelationship edge persistence."""

    async def save(self, relationship: FriendRelationship) -> None:
        """Persist an edge.

        Args:
            relationship: The edge to persist
        """
        ...

    async def delete(self, relationship_id: RelationshipId) -> bool:
        """Delete an edge by id.

        Returns:
            True if deleted, False if not found
        """
        ...

    async def list_between(
        self, follower_id: ProfileId, following_id: ProfileId
    ) -> list[FriendRelationship]:
        """List every edge for an ordered pair, oldest first.

        At most one edge is expected; more than one means concurrent
        follows raced past the existence check.
        """
        ...

    async def list_by_follower(
        self,
        follower_id: ProfileId,
        status: RelationshipStatus | None = None,
    ) -> list[FriendRelationship]:
        """List edges leaving a profile, oldest first.

        Args:
            follower_id: Profile on the follower side
            status: Restrict to one status, or None for all

        Returns:
            Outgoing edges
        """
        ...

    async def list_by_following(
        self,
        following_id: ProfileId,
        status: RelationshipStatus | None = None,
    ) -> list[FriendRelationship]:
        """List edges pointing at a profile, oldest first.

        Args:
            following_id: Profile on the following side
            status: Restrict to one status, or None for all

        Returns:
            Incoming edges
        """
        ...


@runtime_checkable
class IPublicWorkoutRepository(Protocol):
    """Repository for PublicWorkout snapshot persistence."""

    async def save(self, workout: PublicWorkout) -> None:
        """Persist a shared workout snapshot."""
        ...

    async def list_by_owners(
        self, owner_ids: Sequence[ProfileId], limit: int
    ) -> list[PublicWorkout]:
        """List workouts whose owner is in the given set.

        Args:
            owner_ids: Owners to include
            limit: Maximum number of results

        Returns:
            Workouts ordered by date, newest first
        """
        ...

    async def delete_by_owner(self, owner_id: ProfileId) -> int:
        """Delete every workout shared by an owner.

        Returns:
            Number of workouts deleted
        """
        ...


@runtime_checkable
class IPrivacySettingsRepository(Protocol):
    """Repository for the mirrored SocialPrivacySettings of each profile."""

    async def get(self, profile_id: ProfileId) -> SocialPrivacySettings | None:
        """Retrieve the settings mirrored for a profile, or None."""
        ...

    async def save(
        self, profile_id: ProfileId, settings: SocialPrivacySettings
    ) -> None:
        """Mirror a profile's settings, replacing any previous copy."""
        ...

    async def delete(self, profile_id: ProfileId) -> bool:
        """Delete a profile's mirrored settings.

        Returns:
            True if deleted, False if none were stored
        """
        ...
