"""Profile registry application service.

Owns the UserProfile lifecycle. Username uniqueness is enforced with a
check-then-act sequence against an eventually-consistent store: it is
advisory, not guaranteed. Two registrations racing inside the replication
window can both succeed; the registry re-queries after each write and
reports any collision it sees, but does not repair it.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from social.application.observability import (
    DefaultProfileServiceProbe,
    ProfileServiceProbe,
)
from social.application.services.privacy_service import PrivacyService
from social.application.services.relationship_service import RelationshipService
from social.application.value_objects import ListLimits, ProfileUpdate, ProfileView
from social.domain.aggregates import UserProfile
from social.domain.privacy import visible_fields
from social.domain.value_objects import ProfileId, SubjectId, Username
from social.ports.exceptions import (
    AlreadyRegisteredError,
    ProfileNotFoundError,
    UsernameTakenError,
)
from social.ports.repositories import IProfileRepository


class ProfilePurger(Protocol):
    """A component that owns records hanging off a profile."""

    async def purge_profile(self, profile_id: ProfileId) -> None: ...


class ProfileService:
    """Application service for profile registration, lookup and search."""

    def __init__(
        self,
        profile_repository: IProfileRepository,
        relationship_service: RelationshipService,
        privacy_service: PrivacyService,
        limits: ListLimits | None = None,
        cascades: Sequence[ProfilePurger] = (),
        probe: ProfileServiceProbe | None = None,
    ):
        """Initialize ProfileService with dependencies.

        Args:
            profile_repository: Repository for profile persistence
            relationship_service: Graph used to decide friends-only visibility
            privacy_service: Source of each owner's privacy settings
            limits: Default and maximum list sizes
            cascades: Owners of profile-dependent records, purged in order
                before the profile itself is deleted
            probe: Optional domain probe for observability
        """
        self._profiles = profile_repository
        self._relationships = relationship_service
        self._privacy = privacy_service
        self._limits = limits or ListLimits()
        self._cascades: list[ProfilePurger] = list(cascades)
        self._probe = probe or DefaultProfileServiceProbe()

    def add_cascade(self, purger: ProfilePurger) -> None:
        """Register another owner of profile-dependent records."""
        self._cascades.append(purger)

    async def create_profile(
        self,
        subject_id: SubjectId,
        username: str,
        display_name: str,
        bio: str = "",
    ) -> UserProfile:
        """Register the profile for an identity subject.

        Input is validated before any store call is made.

        Args:
            subject_id: Identity subject that will own the profile
            username: Requested username; case-folded before storage
            display_name: Non-empty display name
            bio: Optional free text

        Returns:
            The created UserProfile

        Raises:
            ValueError: If the username or display name is invalid
            AlreadyRegisteredError: If the subject already owns a profile
            UsernameTakenError: If the case-folded username is in use
        """
        profile = UserProfile.create(
            subject_id=subject_id,
            username=Username.parse(username),
            display_name=display_name,
            bio=bio,
        )

        try:
            if await self._profiles.get_by_id(profile.id) is not None:
                raise AlreadyRegisteredError(
                    f"Subject {subject_id} already has a profile"
                )
            if await self._profiles.list_by_username(profile.username):
                raise UsernameTakenError(profile.username)

            await self._profiles.save(profile)
            await self._detect_username_collision(profile.username)

            self._probe.profile_created(profile.id.value, profile.username.value)
            return profile

        except Exception as e:
            self._probe.profile_creation_failed(
                subject_id.value, profile.username.value, str(e)
            )
            raise

    async def _detect_username_collision(self, username: Username) -> None:
        holders = await self._profiles.list_by_username(username)
        ids = sorted({holder.id.value for holder in holders})
        if len(ids) > 1:
            self._probe.username_collision_detected(username.value, ids)

    async def get_profile(self, profile_id: ProfileId) -> UserProfile:
        """Fetch a profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        profile = await self._profiles.get_by_id(profile_id)
        if profile is None:
            raise ProfileNotFoundError(profile_id)
        return profile

    async def get_profile_by_username(self, username: str) -> UserProfile | None:
        """Case-insensitive lookup. Returns None when no profile matches."""
        try:
            canonical = Username.parse(username)
        except ValueError:
            return None
        holders = await self._profiles.list_by_username(canonical)
        return holders[0] if holders else None

    async def update_profile(
        self, profile_id: ProfileId, update: ProfileUpdate
    ) -> UserProfile:
        """Apply a partial update.

        Only the fields set on ``update`` change. Uniqueness is re-checked
        when the username changes.

        Raises:
            ValueError: If a provided value is invalid
            ProfileNotFoundError: If the profile does not exist
            UsernameTakenError: If the new username belongs to someone else
        """
        new_username = (
            Username.parse(update.username) if update.username is not None else None
        )
        if update.display_name is not None:
            UserProfile.validate_display_name(update.display_name)
        UserProfile.validate_counters(
            update.total_workouts or 0, update.total_volume or 0
        )

        try:
            profile = await self.get_profile(profile_id)
            changed: list[str] = []

            username_changed = (
                new_username is not None and new_username != profile.username
            )
            if username_changed:
                holders = await self._profiles.list_by_username(new_username)
                if any(holder.id != profile.id for holder in holders):
                    raise UsernameTakenError(new_username)
                profile.change_username(new_username)
                changed.append("username")
            if update.display_name is not None:
                profile.change_display_name(update.display_name)
                changed.append("display_name")
            if update.bio is not None:
                profile.change_bio(update.bio)
                changed.append("bio")
            if update.avatar_url is not None:
                profile.change_avatar_url(update.avatar_url)
                changed.append("avatar_url")
            if update.is_public is not None:
                profile.change_visibility(update.is_public)
                changed.append("is_public")
            if update.total_workouts is not None or update.total_volume is not None:
                profile.set_counters(update.total_workouts, update.total_volume)
                changed.append("counters")

            await self._profiles.save(profile)
            if username_changed:
                await self._detect_username_collision(profile.username)

            self._probe.profile_updated(profile_id.value, changed)
            return profile

        except Exception as e:
            self._probe.profile_update_failed(profile_id.value, str(e))
            raise

    async def search_profiles(
        self, viewer_id: ProfileId, text: str, limit: int | None = None
    ) -> list[UserProfile]:
        """Case-insensitive substring search over username and display name.

        The caller's own profile and non-public profiles are excluded.
        Results are ordered by username ascending.
        """
        resolved = self._limits.clamp(limit, self._limits.search)
        if not text.strip() or resolved == 0:
            return []
        results = await self._profiles.search(
            text, exclude_id=viewer_id, limit=resolved
        )
        self._probe.profiles_searched(viewer_id.value, len(results))
        return results

    async def suggest_profiles(
        self, viewer_id: ProfileId, limit: int | None = None
    ) -> list[UserProfile]:
        """Most active public profiles, excluding the caller."""
        resolved = self._limits.clamp(limit, self._limits.suggestions)
        if resolved == 0:
            return []
        return await self._profiles.list_most_active(
            exclude_id=viewer_id, limit=resolved
        )

    async def view_profile(
        self, viewer_id: ProfileId, profile_id: ProfileId
    ) -> ProfileView:
        """Project a profile through its owner's privacy settings.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        profile = await self.get_profile(profile_id)
        settings = await self._privacy.get_settings(profile_id)
        follows = await self._relationships.is_following(viewer_id, profile_id)
        fields = visible_fields(viewer_id, profile_id, settings, follows)
        return ProfileView.project(profile, fields)

    async def record_shared_workout(self, profile_id: ProfileId, volume: float) -> None:
        """Fold a shared workout into the owner's denormalized counters.

        The counters are read-modify-written without a compare-and-swap, so
        concurrent shares by the same owner can lose an increment.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        profile = await self.get_profile(profile_id)
        profile.record_shared_workout(volume)
        await self._profiles.save(profile)

    async def delete_profile(self, profile_id: ProfileId) -> None:
        """Delete a profile after purging every record that hangs off it.

        Each cascade owns its own records; a failure stops the deletion and
        leaves the profile in place so the call can be retried.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        await self.get_profile(profile_id)
        for cascade in self._cascades:
            await cascade.purge_profile(profile_id)
        await self._profiles.delete(profile_id)
        self._probe.profile_deleted(profile_id.value)
