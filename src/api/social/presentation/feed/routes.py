"""HTTP routes for the activity feed."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from social.application.services import FeedService
from social.application.value_objects import CurrentViewer
from social.dependencies.authentication import get_current_viewer
from social.dependencies.services import get_feed_service
from social.domain.value_objects import ProfileId
from social.presentation.errors import to_http_exception
from social.presentation.feed.models import (
    FeedEntryResponse,
    ShareWorkoutRequest,
    WorkoutResponse,
)

router = APIRouter(
    prefix="/feed",
    tags=["feed"],
)


@router.get(
    "",
    summary="Load feed",
    description="Newest shared workouts of the profiles the caller follows",
    responses={
        200: {"description": "Feed loaded"},
        400: {"description": "Negative limit"},
        401: {"description": "Authentication required"},
        503: {"description": "Record store unavailable"},
        504: {"description": "Record store timed out"},
    },
)
async def load_feed(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[FeedService, Depends(get_feed_service)],
    limit: Annotated[int | None, Query()] = None,
) -> list[FeedEntryResponse]:
    """Load the caller's feed.

    Entries hidden by an owner's current privacy settings are left out, so
    fewer than ``limit`` entries can come back.
    """
    try:
        entries = await service.load_feed(viewer.profile_id, limit)
        return [FeedEntryResponse.from_entry(entry) for entry in entries]
    except Exception as e:
        raise to_http_exception(e, "Failed to load feed") from e


@router.post("/workouts", status_code=status.HTTP_201_CREATED)
async def share_workout(
    request: ShareWorkoutRequest,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[FeedService, Depends(get_feed_service)],
) -> WorkoutResponse:
    """Share a completed workout with the caller's followers.

    Raises:
        HTTPException: 400 if the workout name is empty or a counter negative
        HTTPException: 404 if the caller has no profile
    """
    try:
        workout = await service.share_workout(viewer.profile_id, request.to_summary())
        return WorkoutResponse.from_domain(workout)
    except Exception as e:
        raise to_http_exception(e, "Failed to share workout") from e


@router.get("/users/{profile_id}/workouts")
async def list_user_workouts(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[FeedService, Depends(get_feed_service)],
    limit: Annotated[int | None, Query()] = None,
) -> list[WorkoutResponse]:
    """Shared workouts of one profile, as the caller may see them."""
    try:
        workouts = await service.load_user_workouts(
            viewer.profile_id, ProfileId.from_string(profile_id), limit
        )
        return [WorkoutResponse.from_domain(workout) for workout in workouts]
    except Exception as e:
        raise to_http_exception(e, "Failed to list workouts") from e
