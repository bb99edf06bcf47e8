"""HTTP routes for profile registration, lookup and search."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from social.application.services import ProfileService
from social.application.value_objects import CurrentViewer
from social.dependencies.authentication import get_current_viewer
from social.dependencies.services import get_profile_service
from social.domain.value_objects import ProfileId
from social.presentation.errors import to_http_exception
from social.presentation.profiles.models import (
    CreateProfileRequest,
    ProfileResponse,
    ProfileSummaryResponse,
    ProfileViewResponse,
    UpdateProfileRequest,
)

router = APIRouter(
    prefix="/profiles",
    tags=["profiles"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Register profile",
    responses={
        201: {"description": "Profile created"},
        400: {"description": "Invalid username or display name"},
        401: {"description": "Authentication required"},
        409: {"description": "Username taken or caller already registered"},
    },
)
async def create_profile(
    request: CreateProfileRequest,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    """Register the caller's profile.

    The profile id is derived from the caller's identity subject, so each
    caller can register exactly once.

    Raises:
        HTTPException: 400 if the username or display name is invalid
        HTTPException: 409 if the username is taken or the caller is registered
    """
    try:
        profile = await service.create_profile(
            subject_id=viewer.principal.subject_id,
            username=request.username,
            display_name=request.display_name,
            bio=request.bio,
        )
        return ProfileResponse.from_domain(profile)
    except Exception as e:
        raise to_http_exception(e, "Failed to create profile") from e


@router.get("/me")
async def get_my_profile(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    """Get the caller's own profile, unfiltered."""
    try:
        profile = await service.get_profile(viewer.profile_id)
        return ProfileResponse.from_domain(profile)
    except Exception as e:
        raise to_http_exception(e, "Failed to get profile") from e


@router.patch("/me")
async def update_my_profile(
    request: UpdateProfileRequest,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    """Apply a partial update to the caller's profile.

    Raises:
        HTTPException: 400 if a provided value is invalid
        HTTPException: 404 if the caller has no profile
        HTTPException: 409 if the new username is taken
    """
    try:
        profile = await service.update_profile(
            viewer.profile_id, request.to_update()
        )
        return ProfileResponse.from_domain(profile)
    except Exception as e:
        raise to_http_exception(e, "Failed to update profile") from e


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_profile(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> None:
    """Delete the caller's profile with its relationships, workouts and settings."""
    try:
        await service.delete_profile(viewer.profile_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete profile") from e


@router.get("/search")
async def search_profiles(
    q: Annotated[str, Query(description="Substring of username or display name")],
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
    limit: Annotated[int | None, Query()] = None,
) -> list[ProfileSummaryResponse]:
    """Search public profiles, ordered by username."""
    try:
        profiles = await service.search_profiles(viewer.profile_id, q, limit)
        return [ProfileSummaryResponse.from_domain(p) for p in profiles]
    except Exception as e:
        raise to_http_exception(e, "Failed to search profiles") from e


@router.get("/suggestions")
async def suggest_profiles(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
    limit: Annotated[int | None, Query()] = None,
) -> list[ProfileSummaryResponse]:
    """Most active public profiles the caller might follow."""
    try:
        profiles = await service.suggest_profiles(viewer.profile_id, limit)
        return [ProfileSummaryResponse.from_domain(p) for p in profiles]
    except Exception as e:
        raise to_http_exception(e, "Failed to load suggestions") from e


@router.get("/by-username/{username}")
async def get_profile_by_username(
    username: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileViewResponse:
    """Look up a profile by username, case-insensitively.

    Raises:
        HTTPException: 404 if no profile has that username
    """
    try:
        profile = await service.get_profile_by_username(username)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No profile with username '{username}'",
            )
        view = await service.view_profile(viewer.profile_id, profile.id)
        return ProfileViewResponse.from_view(view)
    except HTTPException:
        raise
    except Exception as e:
        raise to_http_exception(e, "Failed to get profile") from e


@router.get("/{profile_id}")
async def get_profile(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileViewResponse:
    """Get a profile as the caller is allowed to see it.

    Raises:
        HTTPException: 404 if the profile does not exist
    """
    try:
        view = await service.view_profile(
            viewer.profile_id, ProfileId.from_string(profile_id)
        )
        return ProfileViewResponse.from_view(view)
    except Exception as e:
        raise to_http_exception(e, "Failed to get profile") from e
