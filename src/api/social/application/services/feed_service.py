"""Activity feed application service.

Owns PublicWorkout snapshots and composes the friends feed with a
fan-out-on-read strategy: the viewer's following list is resolved, then a
single query fetches the newest workouts of those owners. Privacy is
evaluated at read time against each owner's current settings, so workouts
shared under looser settings disappear once the owner tightens them. The
feed is built for personal social graphs; following lists are expected to
stay small.
"""

from __future__ import annotations

from typing import Protocol

from social.application.fanout import gather_bounded
from social.application.observability import (
    DefaultFeedServiceProbe,
    FeedServiceProbe,
)
from social.application.services.privacy_service import PrivacyService
from social.application.services.relationship_service import RelationshipService
from social.application.value_objects import (
    FeedEntry,
    ListLimits,
    ProfileView,
    WorkoutSummary,
)
from social.domain.aggregates import PublicWorkout, SocialPrivacySettings
from social.domain.privacy import redact_workout, visible_fields
from social.domain.value_objects import ProfileField, ProfileId
from social.ports.exceptions import InvalidDataError, ProfileNotFoundError
from social.ports.repositories import IProfileRepository, IPublicWorkoutRepository


class ProfileStatsRecorder(Protocol):
    """Owner of the denormalized workout counters on a profile."""

    async def record_shared_workout(
        self, profile_id: ProfileId, volume: float
    ) -> None: ...


class FeedService:
    """Application service for sharing workouts and reading feeds."""

    def __init__(
        self,
        workout_repository: IPublicWorkoutRepository,
        profile_repository: IProfileRepository,
        relationship_service: RelationshipService,
        privacy_service: PrivacyService,
        stats_recorder: ProfileStatsRecorder | None = None,
        limits: ListLimits | None = None,
        fanout_concurrency: int = 8,
        probe: FeedServiceProbe | None = None,
    ):
        """Initialize FeedService with dependencies.

        Args:
            workout_repository: Repository for shared workouts
            profile_repository: Read access to profiles for owner checks
            relationship_service: Source of the viewer's following list
            privacy_service: Source of each owner's current privacy settings
            stats_recorder: Updates the owner's counters after a share
            limits: Default and maximum list sizes
            fanout_concurrency: Maximum concurrent settings lookups
            probe: Optional domain probe for observability
        """
        self._workouts = workout_repository
        self._profiles = profile_repository
        self._relationships = relationship_service
        self._privacy = privacy_service
        self._stats = stats_recorder
        self._limits = limits or ListLimits()
        self._fanout_concurrency = fanout_concurrency
        self._probe = probe or DefaultFeedServiceProbe()

    async def share_workout(
        self, owner_id: ProfileId, summary: WorkoutSummary
    ) -> PublicWorkout:
        """Store a completed workout snapshot for the owner's followers.

        After the snapshot is stored the owner's counters are updated on a
        best-effort basis: a failure there is logged and never raised.

        Raises:
            ValueError: If the name is empty or a counter is negative
            ProfileNotFoundError: If the owner has no profile
        """
        workout = PublicWorkout.share(
            user_id=owner_id,
            workout_name=summary.workout_name,
            date=summary.date,
            total_volume=summary.total_volume,
            exercise_count=summary.exercise_count,
            duration=summary.duration,
            notes=summary.notes,
        )

        try:
            if await self._profiles.get_by_id(owner_id) is None:
                raise ProfileNotFoundError(owner_id)
            await self._workouts.save(workout)
        except Exception as e:
            self._probe.workout_share_failed(owner_id.value, str(e))
            raise

        self._probe.workout_shared(owner_id.value, workout.id.value)
        await self._update_stats(owner_id, workout.total_volume)
        return workout

    async def _update_stats(self, owner_id: ProfileId, volume: float) -> None:
        if self._stats is None:
            return
        try:
            await self._stats.record_shared_workout(owner_id, volume)
        except Exception as e:
            self._probe.stats_update_failed(owner_id.value, str(e))

    async def load_feed(
        self, viewer_id: ProfileId, limit: int | None = None
    ) -> list[FeedEntry]:
        """Newest workouts of the profiles the viewer follows.

        Entries are returned in the query's date-descending order. Entries
        hidden by the owner's current privacy settings are dropped without
        re-sorting, so the result can be shorter than ``limit``. Owners whose
        settings record is malformed are left out.

        Args:
            viewer_id: Profile reading the feed
            limit: Maximum number of entries; defaults to the feed default

        Returns:
            Feed entries, at most ``limit``
        """
        resolved = self._limits.clamp(limit, self._limits.feed)
        if resolved == 0:
            return []

        following = await self._relationships.list_following(viewer_id)
        if not following:
            self._probe.feed_loaded(viewer_id.value, 0, 0, 0)
            return []

        owners = {profile.id: profile for profile in following}
        workouts = await self._workouts.list_by_owners(list(owners), resolved)

        owner_ids = list(dict.fromkeys(workout.user_id for workout in workouts))
        settings = await gather_bounded(
            owner_ids, self._readable_settings, self._fanout_concurrency
        )
        settings_by_owner = dict(zip(owner_ids, settings))

        entries: list[FeedEntry] = []
        hidden = 0
        for workout in workouts:
            owner = owners.get(workout.user_id)
            if owner is None:
                continue
            owner_settings = settings_by_owner[owner.id]
            if owner_settings is None:
                hidden += 1
                continue
            fields = visible_fields(
                viewer_id, owner.id, owner_settings, viewer_follows_owner=True
            )
            if ProfileField.SHARED_WORKOUTS not in fields:
                hidden += 1
                continue
            entries.append(
                FeedEntry(
                    profile=ProfileView.project(owner, fields),
                    workout=redact_workout(workout, fields),
                )
            )

        self._probe.feed_loaded(viewer_id.value, len(owners), len(entries), hidden)
        return entries[:resolved]

    async def _readable_settings(
        self, owner_id: ProfileId
    ) -> SocialPrivacySettings | None:
        """Current settings of an owner, or None when the record is malformed."""
        try:
            return await self._privacy.get_settings(owner_id)
        except InvalidDataError as e:
            self._probe.owner_settings_unreadable(owner_id.value, e.reason)
            return None

    async def load_user_workouts(
        self,
        viewer_id: ProfileId,
        owner_id: ProfileId,
        limit: int | None = None,
    ) -> list[PublicWorkout]:
        """Newest workouts of one owner, as the viewer may see them.

        Raises:
            ProfileNotFoundError: If the owner does not exist
        """
        resolved = self._limits.clamp(limit, self._limits.feed)
        if await self._profiles.get_by_id(owner_id) is None:
            raise ProfileNotFoundError(owner_id)
        if resolved == 0:
            return []

        settings = await self._privacy.get_settings(owner_id)
        follows = await self._relationships.is_following(viewer_id, owner_id)
        fields = visible_fields(viewer_id, owner_id, settings, follows)
        if ProfileField.SHARED_WORKOUTS not in fields:
            return []

        workouts = await self._workouts.list_by_owners([owner_id], resolved)
        return [redact_workout(workout, fields) for workout in workouts]

    async def purge_profile(self, profile_id: ProfileId) -> None:
        """Delete every workout an owner shared (cascade from profile deletion)."""
        removed = await self._workouts.delete_by_owner(profile_id)
        self._probe.workouts_purged(profile_id.value, removed)
