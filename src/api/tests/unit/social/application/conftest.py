"""Fixtures for social application service tests.

Services are wired together exactly as the API wires them, over the
in-memory record store from the unit conftest.
"""

import pytest

from social.application.value_objects import ListLimits, WorkoutSummary
from social.dependencies.services import SocialServices, build_social_services
from social.domain.aggregates import UserProfile
from social.domain.value_objects import SubjectId


@pytest.fixture
def limits() -> ListLimits:
    return ListLimits(feed=20, search=20, suggestions=10, maximum=50)


@pytest.fixture
def services(store, limits) -> SocialServices:
    return build_social_services(store, limits=limits, fanout_concurrency=4)


@pytest.fixture
def register(services):
    """Return a coroutine factory registering a profile by username."""

    async def make(username: str, display_name: str | None = None) -> UserProfile:
        return await services.profiles.create_profile(
            subject_id=SubjectId(f"subject-{username}"),
            username=username,
            display_name=display_name or username.title(),
        )

    return make


@pytest.fixture
def summary(workout_date):
    """Return a factory for workout summaries."""

    def make(
        name: str = "Push Day",
        hour: int = 9,
        total_volume: float = 5000,
        exercise_count: int = 4,
        notes: str = "",
    ) -> WorkoutSummary:
        return WorkoutSummary(
            workout_name=name,
            date=workout_date(hour=hour),
            total_volume=total_volume,
            exercise_count=exercise_count,
            duration=60,
            notes=notes,
        )

    return make
