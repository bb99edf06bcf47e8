"""Privacy policy engine.

Pure, side-effect-free decisions about what a viewer may see of an owner's
profile and shared workouts, and whether a follow request may proceed. The
engine never touches the record store: callers resolve the owner's settings
and the follow edge first and pass them in.

"Friend" for ``friends_only`` visibility means the viewer has an accepted
follow edge to the owner (viewer -> owner).
"""

from __future__ import annotations

from enum import StrEnum

from social.domain.aggregates.privacy_settings import SocialPrivacySettings
from social.domain.aggregates.public_workout import PublicWorkout
from social.domain.value_objects import (
    FollowPermission,
    ProfileField,
    ProfileId,
    ProfileVisibility,
)

ALL_FIELDS: frozenset[ProfileField] = frozenset(ProfileField)

IDENTITY_FIELDS: frozenset[ProfileField] = frozenset(
    {ProfileField.USERNAME, ProfileField.DISPLAY_NAME}
)


class FollowDecision(StrEnum):
    """Outcome of checking a target's follow permission."""

    ALLOW = "allow"
    REQUIRE_APPROVAL = "require_approval"
    DENY = "deny"


def _flag_gated_fields(settings: SocialPrivacySettings) -> frozenset[ProfileField]:
    flags = {
        ProfileField.PROFILE_PHOTO: settings.show_profile_photo,
        ProfileField.BIO: settings.show_bio,
        ProfileField.WORKOUT_COUNT: settings.show_workout_count,
        ProfileField.TOTAL_VOLUME: settings.show_total_volume,
        ProfileField.STREAK: settings.show_streak,
        ProfileField.PERSONAL_RECORDS: settings.show_personal_records,
        ProfileField.SHARED_WORKOUTS: settings.auto_share_workouts,
        ProfileField.EXERCISE_NAMES: settings.show_exercise_names,
        ProfileField.SET_DETAILS: settings.show_set_details,
        ProfileField.WORKOUT_NOTES: settings.show_workout_notes,
    }
    return IDENTITY_FIELDS | {field for field, shown in flags.items() if shown}


def visible_fields(
    viewer_id: ProfileId,
    owner_id: ProfileId,
    settings: SocialPrivacySettings,
    viewer_follows_owner: bool,
) -> frozenset[ProfileField]:
    """Compute which of the owner's fields the viewer may see.

    Rules, first match wins:
    1. Viewing your own profile shows everything.
    2. ``nobody`` visibility shows only username and display name.
    3. ``friends_only`` visibility behaves like ``nobody`` unless the viewer
       follows the owner.
    4. Otherwise each ``show_*`` flag gates its field. Shared workouts are
       gated by ``auto_share_workouts`` so that records shared under looser
       settings disappear once the owner tightens them.

    Args:
        viewer_id: Profile asking to see the data
        owner_id: Profile owning the data
        settings: Owner's current privacy settings
        viewer_follows_owner: Whether an accepted viewer -> owner edge exists

    Returns:
        The set of visible fields
    """
    if viewer_id == owner_id:
        return ALL_FIELDS

    match settings.profile_visibility:
        case ProfileVisibility.NOBODY:
            return IDENTITY_FIELDS
        case ProfileVisibility.FRIENDS_ONLY if not viewer_follows_owner:
            return IDENTITY_FIELDS
        case _:
            return _flag_gated_fields(settings)


def can_view_workouts(
    viewer_id: ProfileId,
    owner_id: ProfileId,
    settings: SocialPrivacySettings,
    viewer_follows_owner: bool,
) -> bool:
    """Whether the owner's shared workouts are visible to the viewer at all."""
    fields = visible_fields(viewer_id, owner_id, settings, viewer_follows_owner)
    return ProfileField.SHARED_WORKOUTS in fields


def redact_workout(
    workout: PublicWorkout, fields: frozenset[ProfileField]
) -> PublicWorkout:
    """Strip workout details the viewer may not see.

    Volume and exercise count are part of the shared snapshot itself and
    are never redacted here; notes are.
    """
    if ProfileField.WORKOUT_NOTES in fields or not workout.notes:
        return workout
    return workout.without_notes()


def follow_decision(settings: SocialPrivacySettings) -> FollowDecision:
    """Map the target's ``who_can_follow`` to a follow decision.

    ``friends_only`` ("friends of friends") needs a second-degree graph walk
    that the relationship graph does not perform, so it is denied rather
    than silently allowed.
    """
    match settings.who_can_follow:
        case FollowPermission.EVERYONE:
            return FollowDecision.ALLOW
        case FollowPermission.APPROVAL_REQUIRED:
            return FollowDecision.REQUIRE_APPROVAL
        case FollowPermission.NOBODY:
            return FollowDecision.DENY
        case FollowPermission.FRIENDS_ONLY:
            return FollowDecision.DENY
    raise ValueError(f"Unknown follow permission: {settings.who_can_follow}")
