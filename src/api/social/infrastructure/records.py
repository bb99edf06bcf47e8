"""Record encoding for social aggregates.

Each aggregate is stored as one flat, JSON-compatible field map. Timestamps
are UTC ISO-8601 strings with microsecond precision, so lexicographic order
in the store matches chronological order. Profiles carry a case-folded
``displayNameSearch`` shadow field because store predicates are
case-sensitive.

Decoders raise InvalidDataError for records missing a required field or
holding a value of the wrong shape.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Callable, Mapping, TypeVar

from shared_kernel.record_store import StoredRecord
from social.domain.aggregates import (
    FriendRelationship,
    PublicWorkout,
    SocialPrivacySettings,
    UserProfile,
)
from social.domain.value_objects import (
    FollowPermission,
    ProfileId,
    ProfileVisibility,
    RelationshipId,
    RelationshipStatus,
    SubjectId,
    Username,
    WorkoutId,
)
from social.ports.exceptions import InvalidDataError

PROFILE_RECORD = "UserProfile"
RELATIONSHIP_RECORD = "FriendRelationship"
WORKOUT_RECORD = "PublicWorkout"
PRIVACY_RECORD = "SocialPrivacySettings"

T = TypeVar("T")

_MISSING = object()

# Aggregate attribute -> stored field name for privacy settings
_PRIVACY_FIELDS: dict[str, str] = {
    "profile_visibility": "profileVisibility",
    "show_profile_photo": "showProfilePhoto",
    "show_bio": "showBio",
    "show_workout_count": "showWorkoutCount",
    "show_total_volume": "showTotalVolume",
    "show_streak": "showStreak",
    "show_personal_records": "showPersonalRecords",
    "auto_share_workouts": "autoShareWorkouts",
    "show_exercise_names": "showExerciseNames",
    "show_set_details": "showSetDetails",
    "show_workout_notes": "showWorkoutNotes",
    "who_can_follow": "whoCanFollow",
    "allow_workout_reactions": "allowWorkoutReactions",
    "allow_comments": "allowComments",
}


def encode_timestamp(value: datetime) -> str:
    """Encode a datetime as a sortable UTC ISO-8601 string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def decode_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def search_key(text: str) -> str:
    """Case-folded form used for case-insensitive matching."""
    return text.strip().casefold()


class _FieldReader:
    """Reads typed values out of a stored record, raising InvalidDataError."""

    def __init__(self, record: StoredRecord) -> None:
        self._record = record

    def _fail(self, reason: str) -> InvalidDataError:
        return InvalidDataError(self._record.record_type, self._record.id, reason)

    def require(self, name: str, convert: Callable[[Any], T]) -> T:
        value = self._record.fields.get(name, _MISSING)
        if value is _MISSING or value is None:
            raise self._fail(f"missing required field '{name}'")
        try:
            return convert(value)
        except (TypeError, ValueError) as e:
            raise self._fail(f"invalid value for '{name}': {e}") from e

    def optional(self, name: str, convert: Callable[[Any], T], default: T) -> T:
        value = self._record.fields.get(name)
        if value is None:
            return default
        try:
            return convert(value)
        except (TypeError, ValueError) as e:
            raise self._fail(f"invalid value for '{name}': {e}") from e

    def build(self, factory: Callable[[], T]) -> T:
        """Construct the aggregate, reporting invariant violations as invalid data."""
        try:
            return factory()
        except ValueError as e:
            raise self._fail(str(e)) from e


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected number, got {type(value).__name__}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected whole number, got {value}")
    return int(value)


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected number, got {type(value).__name__}")
    return float(value)


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {type(value).__name__}")
    return value


def _as_timestamp(value: Any) -> datetime:
    return decode_timestamp(_as_str(value))


# -- UserProfile --------------------------------------------------------------


def encode_profile(profile: UserProfile) -> dict[str, Any]:
    return {
        "subjectId": profile.subject_id.value,
        "username": profile.username.value,
        "displayName": profile.display_name,
        "displayNameSearch": search_key(profile.display_name),
        "bio": profile.bio,
        "avatarUrl": profile.avatar_url,
        "isPublic": profile.is_public,
        "totalWorkouts": profile.total_workouts,
        "totalVolume": profile.total_volume,
        "createdAt": encode_timestamp(profile.created_at),
        "updatedAt": encode_timestamp(profile.updated_at),
    }


def decode_profile(record: StoredRecord) -> UserProfile:
    reader = _FieldReader(record)
    subject_id = reader.require("subjectId", lambda v: SubjectId(_as_str(v)))
    username = reader.require("username", lambda v: Username.parse(_as_str(v)))
    display_name = reader.require("displayName", _as_str)
    created_at = reader.require("createdAt", _as_timestamp)
    updated_at = reader.optional("updatedAt", _as_timestamp, created_at)
    bio = reader.optional("bio", _as_str, "")
    avatar_url = reader.optional("avatarUrl", _as_str, None)
    is_public = reader.optional("isPublic", _as_bool, True)
    total_workouts = reader.optional("totalWorkouts", _as_int, 0)
    total_volume = reader.optional("totalVolume", _as_float, 0.0)

    return reader.build(
        lambda: UserProfile(
            id=ProfileId(value=record.id),
            subject_id=subject_id,
            username=username,
            display_name=display_name,
            bio=bio,
            avatar_url=avatar_url,
            is_public=is_public,
            total_workouts=total_workouts,
            total_volume=total_volume,
            created_at=created_at,
            updated_at=updated_at,
        )
    )


# -- FriendRelationship -------------------------------------------------------


def encode_relationship(relationship: FriendRelationship) -> dict[str, Any]:
    return {
        "followerId": relationship.follower_id.value,
        "followingId": relationship.following_id.value,
        "status": relationship.status.value,
        "createdAt": encode_timestamp(relationship.created_at),
    }


def decode_relationship(record: StoredRecord) -> FriendRelationship:
    reader = _FieldReader(record)
    follower_id = reader.require("followerId", lambda v: ProfileId(_as_str(v)))
    following_id = reader.require("followingId", lambda v: ProfileId(_as_str(v)))
    status = reader.require("status", lambda v: RelationshipStatus(_as_str(v)))
    created_at = reader.require("createdAt", _as_timestamp)

    return reader.build(
        lambda: FriendRelationship(
            id=RelationshipId(value=record.id),
            follower_id=follower_id,
            following_id=following_id,
            status=status,
            created_at=created_at,
        )
    )


# -- PublicWorkout ------------------------------------------------------------


def encode_workout(workout: PublicWorkout) -> dict[str, Any]:
    return {
        "userId": workout.user_id.value,
        "workoutName": workout.workout_name,
        "date": encode_timestamp(workout.date),
        "totalVolume": workout.total_volume,
        "exerciseCount": workout.exercise_count,
        "duration": workout.duration,
        "notes": workout.notes,
        "likeCount": workout.like_count,
        "commentCount": workout.comment_count,
        "createdAt": encode_timestamp(workout.created_at),
    }


def decode_workout(record: StoredRecord) -> PublicWorkout:
    reader = _FieldReader(record)
    user_id = reader.require("userId", lambda v: ProfileId(_as_str(v)))
    workout_name = reader.require("workoutName", _as_str)
    date = reader.require("date", _as_timestamp)
    created_at = reader.optional("createdAt", _as_timestamp, date)
    total_volume = reader.optional("totalVolume", _as_float, 0.0)
    exercise_count = reader.optional("exerciseCount", _as_int, 0)
    duration = reader.optional("duration", _as_int, 0)
    notes = reader.optional("notes", _as_str, "")
    like_count = reader.optional("likeCount", _as_int, 0)
    comment_count = reader.optional("commentCount", _as_int, 0)

    return reader.build(
        lambda: PublicWorkout(
            id=WorkoutId(value=record.id),
            user_id=user_id,
            workout_name=workout_name,
            date=date,
            total_volume=total_volume,
            exercise_count=exercise_count,
            duration=duration,
            notes=notes,
            like_count=like_count,
            comment_count=comment_count,
            created_at=created_at,
        )
    )


# -- SocialPrivacySettings ----------------------------------------------------


def encode_privacy_settings(settings: SocialPrivacySettings) -> dict[str, Any]:
    values = settings.to_dict()
    encoded: dict[str, Any] = {}
    for attr, stored in _PRIVACY_FIELDS.items():
        value = values[attr]
        # StrEnum members serialize as their plain string value
        encoded[stored] = str(value) if isinstance(value, str) else value
    return encoded


def decode_privacy_settings(record: StoredRecord) -> SocialPrivacySettings:
    """Decode mirrored settings.

    Missing flags fall back to the field defaults so that settings mirrored
    by an older client keep working after a flag is added.
    """
    reader = _FieldReader(record)
    defaults = SocialPrivacySettings()
    converters: Mapping[str, Callable[[Any], Any]] = {
        "profile_visibility": lambda v: ProfileVisibility(_as_str(v)),
        "who_can_follow": lambda v: FollowPermission(_as_str(v)),
    }
    values = {
        attr: reader.optional(
            stored, converters.get(attr, _as_bool), getattr(defaults, attr)
        )
        for attr, stored in _PRIVACY_FIELDS.items()
    }
    return reader.build(lambda: SocialPrivacySettings(**values))


def decode_each(
    records: list[StoredRecord],
    decode: Callable[[StoredRecord], T],
    on_skip: Callable[[InvalidDataError], None],
) -> list[T]:
    """Decode a batch, skipping malformed records instead of failing it."""
    decoded: list[T] = []
    for record in records:
        try:
            decoded.append(decode(record))
        except InvalidDataError as e:
            on_skip(e)
    return decoded
