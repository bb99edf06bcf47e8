"""Privacy settings application service.

Owns the remote mirror of each profile's SocialPrivacySettings. The settings
are a single record per profile, so every update is one atomic write.
"""

from __future__ import annotations

from social.application.observability import (
    DefaultPrivacyServiceProbe,
    PrivacyServiceProbe,
)
from social.domain.aggregates import SocialPrivacySettings
from social.domain.value_objects import PrivacyPreset, ProfileId
from social.ports.repositories import IPrivacySettingsRepository


class PrivacyService:
    """Application service for per-profile privacy settings."""

    def __init__(
        self,
        privacy_repository: IPrivacySettingsRepository,
        probe: PrivacyServiceProbe | None = None,
    ):
        """Initialize PrivacyService with dependencies.

        Args:
            privacy_repository: Repository for the settings mirror
            probe: Optional domain probe for observability
        """
        self._repository = privacy_repository
        self._probe = probe or DefaultPrivacyServiceProbe()

    async def get_settings(self, profile_id: ProfileId) -> SocialPrivacySettings:
        """Current settings for a profile, or the defaults if none are mirrored."""
        settings = await self._repository.get(profile_id)
        if settings is None:
            return SocialPrivacySettings.defaults()
        return settings

    async def update_settings(
        self, profile_id: ProfileId, settings: SocialPrivacySettings
    ) -> SocialPrivacySettings:
        """Replace a profile's settings.

        Tightened settings take effect on the next read of every feed; shared
        workouts are never deleted by a settings change.
        """
        await self._repository.save(profile_id, settings)
        self._probe.settings_updated(profile_id.value, preset=None)
        return settings

    async def apply_preset(
        self, profile_id: ProfileId, preset: PrivacyPreset
    ) -> SocialPrivacySettings:
        """Replace a profile's settings with a named preset."""
        settings = SocialPrivacySettings.for_preset(preset)
        await self._repository.save(profile_id, settings)
        self._probe.settings_updated(profile_id.value, preset=preset.value)
        return settings

    async def purge_profile(self, profile_id: ProfileId) -> None:
        """Delete a profile's settings mirror (cascade from profile deletion)."""
        if await self._repository.delete(profile_id):
            self._probe.settings_purged(profile_id.value)
