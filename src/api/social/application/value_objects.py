"""Application-layer value objects for the social bounded context.

These represent the request's identity context, caller-supplied inputs and
the read-only projections that cross the service boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from social.domain.aggregates import FriendRelationship, PublicWorkout, UserProfile
from social.domain.value_objects import ProfileField, ProfileId, SubjectId


@dataclass(frozen=True)
class Principal:
    """An authenticated caller as resolved from the identity provider.

    This is an application-layer concept (not domain) because it represents
    the authentication context of the request, not a core business entity.
    """

    subject_id: SubjectId
    username_hint: str | None = None


@dataclass(frozen=True)
class CurrentViewer:
    """The authenticated caller together with the profile id it maps to."""

    principal: Principal
    profile_id: ProfileId


@dataclass(frozen=True)
class ProfileUpdate:
    """Partial profile update. Fields left as None are not changed.

    An empty ``avatar_url`` clears the avatar.
    """

    username: str | None = None
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    is_public: bool | None = None
    total_workouts: int | None = None
    total_volume: float | None = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


@dataclass(frozen=True)
class WorkoutSummary:
    """Snapshot of a completed local workout handed over for sharing.

    Volume, exercise count and duration are computed by the owning client.
    Duration is in minutes.
    """

    workout_name: str
    date: datetime
    total_volume: float
    exercise_count: int
    duration: int
    notes: str = ""


@dataclass(frozen=True)
class ProfileView:
    """Privacy-filtered projection of a profile for one viewer.

    Fields the viewer may not see are None. ``visible_fields`` carries the
    full decision so presentation code can render placeholders.
    """

    id: ProfileId
    username: str
    display_name: str
    bio: str | None
    avatar_url: str | None
    total_workouts: int | None
    total_volume: float | None
    is_public: bool
    visible_fields: frozenset[ProfileField]

    @classmethod
    def project(
        cls, profile: UserProfile, fields: frozenset[ProfileField]
    ) -> ProfileView:
        """Build the view of a profile restricted to the given fields."""
        return cls(
            id=profile.id,
            username=profile.username.value,
            display_name=profile.display_name,
            bio=profile.bio if ProfileField.BIO in fields else None,
            avatar_url=(
                profile.avatar_url if ProfileField.PROFILE_PHOTO in fields else None
            ),
            total_workouts=(
                profile.total_workouts
                if ProfileField.WORKOUT_COUNT in fields
                else None
            ),
            total_volume=(
                profile.total_volume if ProfileField.TOTAL_VOLUME in fields else None
            ),
            is_public=profile.is_public,
            visible_fields=fields,
        )


@dataclass(frozen=True)
class FeedEntry:
    """One feed item: a shared workout and its owner as seen by the viewer."""

    profile: ProfileView
    workout: PublicWorkout


class FollowOutcome(StrEnum):
    """How a follow call completed.

    FOLLOWED: an accepted edge was created
    PENDING_APPROVAL: the target requires approval; a pending edge was created
    DUPLICATE_RESOLVED: a concurrent follow raced this one; the oldest edge
        was kept and the others removed
    """

    FOLLOWED = "followed"
    PENDING_APPROVAL = "pending_approval"
    DUPLICATE_RESOLVED = "duplicate_resolved"


@dataclass(frozen=True)
class FollowResult:
    """Result of a follow call: the surviving edge and how it came about."""

    relationship: FriendRelationship
    outcome: FollowOutcome


@dataclass(frozen=True)
class ListLimits:
    """Default and maximum result counts for list operations."""

    feed: int = 20
    search: int = 20
    suggestions: int = 10
    maximum: int = 50

    def clamp(self, requested: int | None, default: int) -> int:
        """Resolve a caller's limit.

        None means the operation's default. Requests above the maximum are
        reduced to it.

        Raises:
            ValueError: If the limit is negative
        """
        if requested is None:
            return min(default, self.maximum)
        if requested < 0:
            raise ValueError("limit cannot be negative")
        return min(requested, self.maximum)
