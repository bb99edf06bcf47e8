"""SocialPrivacySettings for the social context."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from social.domain.value_objects import (
    FollowPermission,
    PrivacyPreset,
    ProfileVisibility,
)


@dataclass(frozen=True)
class SocialPrivacySettings:
    """Per-user configuration consulted by the privacy engine.

    Every field the graph exposes is gated by one of these flags. Instances
    are immutable; use ``replace`` or a preset to derive a new one.
    """

    profile_visibility: ProfileVisibility = ProfileVisibility.EVERYONE
    show_profile_photo: bool = True
    show_bio: bool = True
    show_workout_count: bool = True
    show_total_volume: bool = True
    show_streak: bool = True
    show_personal_records: bool = False
    auto_share_workouts: bool = False
    show_exercise_names: bool = True
    show_set_details: bool = False
    show_workout_notes: bool = False
    who_can_follow: FollowPermission = FollowPermission.EVERYONE
    allow_workout_reactions: bool = True
    allow_comments: bool = False

    @classmethod
    def for_preset(cls, preset: PrivacyPreset) -> SocialPrivacySettings:
        """Build the settings bundle for a named preset."""
        match preset:
            case PrivacyPreset.PUBLIC:
                return cls(
                    profile_visibility=ProfileVisibility.EVERYONE,
                    show_personal_records=True,
                    auto_share_workouts=True,
                    show_set_details=True,
                    who_can_follow=FollowPermission.EVERYONE,
                    allow_comments=True,
                )
            case PrivacyPreset.FRIENDS_ONLY:
                return cls(
                    profile_visibility=ProfileVisibility.FRIENDS_ONLY,
                    who_can_follow=FollowPermission.FRIENDS_ONLY,
                )
            case PrivacyPreset.PRIVATE:
                return cls(
                    profile_visibility=ProfileVisibility.NOBODY,
                    show_workout_count=False,
                    show_total_volume=False,
                    show_streak=False,
                    show_exercise_names=False,
                    who_can_follow=FollowPermission.NOBODY,
                    allow_workout_reactions=False,
                )
        raise ValueError(f"Unknown privacy preset: {preset}")

    @classmethod
    def defaults(cls) -> SocialPrivacySettings:
        """Settings assumed for a profile that never mirrored its own.

        Sharing is a deliberate act for such owners, so workouts they share
        stay visible to their followers.
        """
        return cls(auto_share_workouts=True)

    def replace(self, **changes: object) -> SocialPrivacySettings:
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, object]:
        return {
            field.name: getattr(self, field.name)
            for field in dataclasses.fields(self)
        }
