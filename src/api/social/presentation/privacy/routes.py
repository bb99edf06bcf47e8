"""HTTP routes for the caller's privacy settings."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from social.application.services import PrivacyService
from social.application.value_objects import CurrentViewer
from social.dependencies.authentication import get_current_viewer
from social.dependencies.services import get_privacy_service
from social.domain.value_objects import PrivacyPreset
from social.presentation.errors import to_http_exception
from social.presentation.privacy.models import PrivacySettingsModel

router = APIRouter(
    prefix="/privacy",
    tags=["privacy"],
)


@router.get("")
async def get_privacy_settings(
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[PrivacyService, Depends(get_privacy_service)],
) -> PrivacySettingsModel:
    """Get the caller's privacy settings, or the defaults if never set."""
    try:
        settings = await service.get_settings(viewer.profile_id)
        return PrivacySettingsModel.from_domain(settings)
    except Exception as e:
        raise to_http_exception(e, "Failed to get privacy settings") from e


@router.put("")
async def update_privacy_settings(
    request: PrivacySettingsModel,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[PrivacyService, Depends(get_privacy_service)],
) -> PrivacySettingsModel:
    """Replace the caller's privacy settings.

    Changes apply to every feed on its next read.
    """
    try:
        settings = await service.update_settings(
            viewer.profile_id, request.to_domain()
        )
        return PrivacySettingsModel.from_domain(settings)
    except Exception as e:
        raise to_http_exception(e, "Failed to update privacy settings") from e


@router.post("/presets/{preset}")
async def apply_privacy_preset(
    preset: PrivacyPreset,
    viewer: Annotated[CurrentViewer, Depends(get_current_viewer)],
    service: Annotated[PrivacyService, Depends(get_privacy_service)],
) -> PrivacySettingsModel:
    """Replace the caller's settings with a named preset."""
    try:
        settings = await service.apply_preset(viewer.profile_id, preset)
        return PrivacySettingsModel.from_domain(settings)
    except Exception as e:
        raise to_http_exception(e, "Failed to apply privacy preset") from e
