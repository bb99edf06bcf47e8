"""Pydantic models for feed API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from social.application.value_objects import FeedEntry, WorkoutSummary
from social.domain.aggregates import PublicWorkout
from social.presentation.profiles.models import ProfileViewResponse


class ShareWorkoutRequest(BaseModel):
    """A completed workout to share with followers.

    Volume, exercise count and duration are computed by the client.
    """

    workout_name: str = Field(..., description="Workout name")
    date: datetime = Field(..., description="When the workout was performed")
    total_volume: float = Field(default=0.0, description="Total volume lifted")
    exercise_count: int = Field(default=0)
    duration: int = Field(default=0, description="Duration in minutes")
    notes: str = Field(default="")

    def to_summary(self) -> WorkoutSummary:
        return WorkoutSummary(
            workout_name=self.workout_name,
            date=self.date,
            total_volume=self.total_volume,
            exercise_count=self.exercise_count,
            duration=self.duration,
            notes=self.notes,
        )


class WorkoutResponse(BaseModel):
    """A shared workout snapshot."""

    id: str = Field(..., description="Workout ID (ULID format)")
    user_id: str
    workout_name: str
    date: datetime
    total_volume: float
    exercise_count: int
    duration: int
    notes: str
    like_count: int
    comment_count: int
    created_at: datetime

    @classmethod
    def from_domain(cls, workout: PublicWorkout) -> WorkoutResponse:
        return cls(
            id=workout.id.value,
            user_id=workout.user_id.value,
            workout_name=workout.workout_name,
            date=workout.date,
            total_volume=workout.total_volume,
            exercise_count=workout.exercise_count,
            duration=workout.duration,
            notes=workout.notes,
            like_count=workout.like_count,
            comment_count=workout.comment_count,
            created_at=workout.created_at,
        )


class FeedEntryResponse(BaseModel):
    """One feed item with its owner as the caller may see them."""

    profile: ProfileViewResponse
    workout: WorkoutResponse

    @classmethod
    def from_entry(cls, entry: FeedEntry) -> FeedEntryResponse:
        return cls(
            profile=ProfileViewResponse.from_view(entry.profile),
            workout=WorkoutResponse.from_domain(entry.workout),
        )
