"""HTTP routes for following, follow requests and blocks."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from social.application.services import RelationshipService
from social.application.value_objects import CurrentViewer
from social.dependencies.authentication import get_current_viewer
from social.dependencies.services import get_relationship_service
from social.domain.value_objects import ProfileId
from social.presentation.errors import to_http_exception
from social.presentation.profiles.models import ProfileSummaryResponse
from social.presentation.relationships.models import (
    FollowResponse,
    FollowStatusResponse,
    RelationshipResponse,
)

router = APIRouter(
    prefix="/relationships",
    tags=["relationships"],
)


@router.post(
    "/following/{profile_id}",
    status_code=status.HTTP_201_CREATED,
    summary="Follow a profile",
    responses={
        201: {"description": "Followed, or follow request created"},
        400: {"description": "Caller tried to follow itself"},
        403: {"description": "The profile does not accept this follower"},
        404: {"description": "Profile not found"},
        409: {"description": "Already following"},
    },
)
async def follow(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
) -> FollowResponse:
    """Follow a profile.

    Targets that require approval get a pending request instead of an
    accepted edge; the response outcome says which happened.
    """
    try:
        result = await service.follow(
            viewer.profile_id, ProfileId.from_string(profile_id)
        )
        return FollowResponse.from_result(result)
    except Exception as e:
        raise to_http_exception(e, "Failed to follow profile") from e


@router.delete("/following/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
) -> None:
    """Unfollow a profile or withdraw a pending request.

    Raises:
        HTTPException: 404 if the caller does not follow the profile
    """
    try:
        await service.unfollow(viewer.profile_id, ProfileId.from_string(profile_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to unfollow profile") from e


@router.get("/following")
async def list_following(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
    limit: Annotated[int | None, Query(ge=0)] = None,
) -> list[ProfileSummaryResponse]:
    """Profiles the caller follows."""
    try:
        profiles = await service.list_following(viewer.profile_id, limit)
        return [ProfileSummaryResponse.from_domain(p) for p in profiles]
    except Exception as e:
        raise to_http_exception(e, "Failed to list following") from e


@router.get("/followers")
async def list_followers(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
    limit: Annotated[int | None, Query(ge=0)] = None,
) -> list[ProfileSummaryResponse]:
    """Profiles following the caller."""
    try:
        profiles = await service.list_followers(viewer.profile_id, limit)
        return [ProfileSummaryResponse.from_domain(p) for p in profiles]
    except Exception as e:
        raise to_http_exception(e, "Failed to list followers") from e


@router.get("/following/{profile_id}")
async def get_follow_status(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
) -> FollowStatusResponse:
    """Whether the caller follows a profile."""
    try:
        following = await service.is_following(
            viewer.profile_id, ProfileId.from_string(profile_id)
        )
        return FollowStatusResponse(profile_id=profile_id, following=following)
    except Exception as e:
        raise to_http_exception(e, "Failed to check follow status") from e


@router.get("/requests")
async def list_follow_requests(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
    limit: Annotated[int | None, Query(ge=0)] = None,
) -> list[ProfileSummaryResponse]:
    """Profiles waiting for the caller to approve their follow request."""
    try:
        profiles = await service.list_pending_requests(viewer.profile_id, limit)
        return [ProfileSummaryResponse.from_domain(p) for p in profiles]
    except Exception as e:
        raise to_http_exception(e, "Failed to list follow requests") from e


@router.post("/requests/{profile_id}/accept")
async def accept_follow_request(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
) -> RelationshipResponse:
    """Approve a pending follow request from ``profile_id``.

    Raises:
        HTTPException: 404 if no pending request exists
    """
    try:
        edge = await service.accept_request(
            viewer.profile_id, ProfileId.from_string(profile_id)
        )
        return RelationshipResponse.from_domain(edge)
    except Exception as e:
        raise to_http_exception(e, "Failed to accept follow request") from e


@router.post(
    "/requests/{profile_id}/decline", status_code=status.HTTP_204_NO_CONTENT
)
async def decline_follow_request(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
) -> None:
    """Decline a pending follow request from ``profile_id``."""
    try:
        await service.decline_request(
            viewer.profile_id, ProfileId.from_string(profile_id)
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to decline follow request") from e


@router.post("/blocked/{profile_id}")
async def block_profile(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
) -> RelationshipResponse:
    """Block a profile from following the caller.

    Raises:
        HTTPException: 400 if the caller tries to block itself
        HTTPException: 404 if the profile does not exist
    """
    try:
        edge = await service.block(
            viewer.profile_id, ProfileId.from_string(profile_id)
        )
        return RelationshipResponse.from_domain(edge)
    except Exception as e:
        raise to_http_exception(e, "Failed to block profile") from e


@router.delete("/blocked/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unblock_profile(
    profile_id: str,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[RelationshipService, Depends(get_relationship_service)],
) -> None:
    """Lift a block placed by the caller."""
    try:
        await service.unblock(viewer.profile_id, ProfileId.from_string(profile_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to unblock profile") from e
