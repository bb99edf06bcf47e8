"""Record store implementation of IPrivacySettingsRepository."""

from __future__ import annotations

from shared_kernel.record_store import RecordStore
from social.domain.aggregates import SocialPrivacySettings
from social.domain.value_objects import ProfileId
from social.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from social.infrastructure.records import (
    PRIVACY_RECORD,
    decode_privacy_settings,
    encode_privacy_settings,
)
from social.ports.repositories import IPrivacySettingsRepository


class PrivacySettingsRepository(IPrivacySettingsRepository):
    """Stores one settings record per profile, keyed by the profile id."""

    def __init__(self, store: RecordStore, probe: RepositoryProbe | None = None):
        self._store = store
        self._probe = probe or DefaultRepositoryProbe()

    async def get(self, profile_id: ProfileId) -> SocialPrivacySettings | None:
        record = await self._store.get(PRIVACY_RECORD, profile_id.value)
        if record is None:
            self._probe.aggregate_not_found(PRIVACY_RECORD, profile_id.value)
            return None
        return decode_privacy_settings(record)

    async def save(
        self, profile_id: ProfileId, settings: SocialPrivacySettings
    ) -> None:
        await self._store.save(
            PRIVACY_RECORD, profile_id.value, encode_privacy_settings(settings)
        )
        self._probe.aggregate_saved(PRIVACY_RECORD, profile_id.value)

    async def delete(self, profile_id: ProfileId) -> bool:
        existed = await self._store.delete(PRIVACY_RECORD, profile_id.value)
        self._probe.aggregate_deleted(PRIVACY_RECORD, profile_id.value, existed)
        return existed
