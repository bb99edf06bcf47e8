"""Fixtures for social HTTP route tests.

Routes are mounted on a bare FastAPI app with the caller and every service
replaced through dependency overrides.
"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from social.application.services import (
    FeedService,
    PrivacyService,
    ProfileService,
    RelationshipService,
)
from social.application.value_objects import CurrentViewer, Principal
from social.domain.aggregates import UserProfile
from social.domain.value_objects import ProfileId, SubjectId, Username


@pytest.fixture
def viewer() -> CurrentViewer:
    principal = Principal(subject_id=SubjectId("subject-viewer"))
    return CurrentViewer(
        principal=principal, profile_id=ProfileId.from_subject(principal.subject_id)
    )


@pytest.fixture
def mock_profile_service() -> AsyncMock:
    return AsyncMock(spec=ProfileService)


@pytest.fixture
def mock_relationship_service() -> AsyncMock:
    return AsyncMock(spec=RelationshipService)


@pytest.fixture
def mock_feed_service() -> AsyncMock:
    return AsyncMock(spec=FeedService)


@pytest.fixture
def mock_privacy_service() -> AsyncMock:
    return AsyncMock(spec=PrivacyService)


@pytest.fixture
def make_profile():
    """Return a factory for stored profiles."""

    def make(username: str, **changes) -> UserProfile:
        profile = UserProfile.create(
            subject_id=SubjectId(f"subject-{username}"),
            username=Username.parse(username),
            display_name=username.title(),
        )
        profile.created_at = profile.updated_at = datetime(2026, 3, 1, tzinfo=UTC)
        for name, value in changes.items():
            setattr(profile, name, value)
        return profile

    return make


@pytest.fixture
def test_client(
    viewer,
    mock_profile_service,
    mock_relationship_service,
    mock_feed_service,
    mock_privacy_service,
) -> TestClient:
    """Create TestClient with mocked dependencies."""
    from social.dependencies.authentication import get_current_viewer
    from social.dependencies.services import (
        get_feed_service,
        get_privacy_service,
        get_profile_service,
        get_relationship_service,
    )
    from social.presentation import router

    app = FastAPI()

    app.dependency_overrides[get_current_viewer] = lambda: viewer
    app.dependency_overrides[get_profile_service] = lambda: mock_profile_service
    app.dependency_overrides[get_relationship_service] = (
        lambda: mock_relationship_service
    )
    app.dependency_overrides[get_feed_service] = lambda: mock_feed_service
    app.dependency_overrides[get_privacy_service] = lambda: mock_privacy_service

    app.include_router(router)

    return TestClient(app)
