"""PublicWorkout aggregate for the social context."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import UTC, datetime

from social.domain.value_objects import ProfileId, WorkoutId

WORKOUT_NAME_MAX_LENGTH = 200


@dataclass(frozen=True)
class PublicWorkout:
    """Immutable snapshot of a completed workout shared to followers.

    The owning client computes volume, exercise count and duration; they are
    trusted as given and only checked for sign. Likes and comments exist
    here only as counters.
    """

    id: WorkoutId
    user_id: ProfileId
    workout_name: str
    date: datetime
    total_volume: float
    exercise_count: int
    duration: int
    notes: str
    like_count: int
    comment_count: int
    created_at: datetime

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        if not self.workout_name or not self.workout_name.strip():
            raise ValueError("Workout name cannot be empty")
        if len(self.workout_name) > WORKOUT_NAME_MAX_LENGTH:
            raise ValueError(
                f"Workout name must be at most {WORKOUT_NAME_MAX_LENGTH} characters"
            )
        counters = {
            "total_volume": self.total_volume,
            "exercise_count": self.exercise_count,
            "duration": self.duration,
            "like_count": self.like_count,
            "comment_count": self.comment_count,
        }
        for name, value in counters.items():
            if value < 0:
                raise ValueError(f"{name} cannot be negative")

    @classmethod
    def share(
        cls,
        user_id: ProfileId,
        workout_name: str,
        date: datetime,
        total_volume: float,
        exercise_count: int,
        duration: int,
        notes: str = "",
    ) -> PublicWorkout:
        """Factory method creating a freshly shared workout.

        Raises:
            ValueError: If the name is empty or a counter is negative
        """
        if date.tzinfo is None:
            date = date.replace(tzinfo=UTC)
        return cls(
            id=WorkoutId.generate(),
            user_id=user_id,
            workout_name=workout_name.strip(),
            date=date,
            total_volume=float(total_volume),
            exercise_count=exercise_count,
            duration=duration,
            notes=notes or "",
            like_count=0,
            comment_count=0,
            created_at=datetime.now(UTC),
        )

    def without_notes(self) -> PublicWorkout:
        """Copy of this workout with the notes removed."""
        return dataclasses.replace(self, notes="")
