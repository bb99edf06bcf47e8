"""Value objects for the social domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
_USERNAME_PATTERN = re.compile(r"^[a-z0-9_]+$")


@dataclass(frozen=True)
class SubjectId:
    """Stable opaque identifier issued by the external identity provider."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("SubjectId cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ProfileId:
    """Identifier for a UserProfile aggregate.

    Derived 1:1 from the identity subject, so the same subject always maps
    to the same profile record and a second registration lands on the
    existing record instead of creating a new one.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_subject(cls, subject_id: SubjectId) -> ProfileId:
        """Derive the profile id for an identity subject."""
        digest = hashlib.sha256(subject_id.value.encode("utf-8")).hexdigest()
        return cls(value=f"usr_{digest[:32]}")

    @classmethod
    def from_string(cls, value: str) -> ProfileId:
        """Create ProfileId from string value.

        Raises:
            ValueError: If value is empty
        """
        if not value or not value.strip():
            raise ValueError("Invalid ProfileId: empty value")
        return cls(value=value)


@dataclass(frozen=True)
class RelationshipId:
    """Identifier for a FriendRelationship edge.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> RelationshipId:
        """Generate a new RelationshipId using ULID."""
        return cls(value=str(ULID()))


@dataclass(frozen=True)
class WorkoutId:
    """Identifier for a PublicWorkout.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> WorkoutId:
        """Generate a new WorkoutId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> WorkoutId:
        """Create WorkoutId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid WorkoutId: {value}") from e
        return cls(value=value)


@dataclass(frozen=True)
class Username:
    """A case-folded, validated username.

    Usernames compare case-insensitively, so the canonical form is always
    lower case. "Vin" and "vin" are the same username.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def parse(cls, raw: str) -> Username:
        """Validate and case-fold a username.

        Args:
            raw: Username as entered by the user

        Returns:
            Canonical Username

        Raises:
            ValueError: If the username is too short, too long or contains
                characters outside [a-z0-9_]
        """
        folded = raw.strip().casefold()
        if len(folded) < USERNAME_MIN_LENGTH:
            raise ValueError(
                f"Username must be at least {USERNAME_MIN_LENGTH} characters"
            )
        if len(folded) > USERNAME_MAX_LENGTH:
            raise ValueError(
                f"Username must be at most {USERNAME_MAX_LENGTH} characters"
            )
        if not _USERNAME_PATTERN.match(folded):
            raise ValueError(
                "Username may only contain letters, numbers and underscores"
            )
        return cls(value=folded)


class RelationshipStatus(StrEnum):
    """State of a follow edge.

    The simple-follow flow only produces ACCEPTED. PENDING comes from the
    approval workflow and BLOCKED from the target blocking the follower.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    BLOCKED = "blocked"


class ProfileVisibility(StrEnum):
    """Who can see a profile's details."""

    EVERYONE = "everyone"
    FRIENDS_ONLY = "friends_only"
    NOBODY = "nobody"


class FollowPermission(StrEnum):
    """Who may follow a user."""

    EVERYONE = "everyone"
    FRIENDS_ONLY = "friends_only"
    APPROVAL_REQUIRED = "approval_required"
    NOBODY = "nobody"


class ProfileField(StrEnum):
    """Fields of a profile and its shared content gated by privacy settings."""

    USERNAME = "username"
    DISPLAY_NAME = "display_name"
    PROFILE_PHOTO = "profile_photo"
    BIO = "bio"
    WORKOUT_COUNT = "workout_count"
    TOTAL_VOLUME = "total_volume"
    STREAK = "streak"
    PERSONAL_RECORDS = "personal_records"
    SHARED_WORKOUTS = "shared_workouts"
    EXERCISE_NAMES = "exercise_names"
    SET_DETAILS = "set_details"
    WORKOUT_NOTES = "workout_notes"


class PrivacyPreset(StrEnum):
    """Named bundles of privacy settings."""

    PUBLIC = "public"
    FRIENDS_ONLY = "friends_only"
    PRIVATE = "private"
