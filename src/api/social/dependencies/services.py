"""Service wiring for the social API.

Services are assembled per request over the application-wide record store.
They are built together because profile deletion cascades into the
relationship graph, the feed and the privacy mirror, while sharing a
workout updates the owner's profile counters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends

from infrastructure.dependencies import get_record_store
from infrastructure.settings import (
    FeedSettings,
    RecordStoreSettings,
    get_feed_settings,
    get_record_store_settings,
)
from shared_kernel.record_store import RecordStore
from social.application.services import (
    FeedService,
    PrivacyService,
    ProfileService,
    RelationshipService,
)
from social.application.value_objects import ListLimits
from social.infrastructure.privacy_settings_repository import (
    PrivacySettingsRepository,
)
from social.infrastructure.profile_repository import ProfileRepository
from social.infrastructure.relationship_repository import RelationshipRepository
from social.infrastructure.workout_repository import PublicWorkoutRepository


@dataclass(frozen=True)
class SocialServices:
    """The social application services sharing one set of repositories."""

    profiles: ProfileService
    relationships: RelationshipService
    feed: FeedService
    privacy: PrivacyService


def build_social_services(
    store: RecordStore,
    limits: ListLimits | None = None,
    fanout_concurrency: int = 8,
) -> SocialServices:
    """Assemble the social services over a record store.

    Args:
        store: Record store shared by every repository
        limits: Default and maximum list sizes
        fanout_concurrency: Maximum concurrent lookups during fan-out reads

    Returns:
        SocialServices with profile deletion cascading in the order
        relationships, feed, privacy
    """
    limits = limits or ListLimits()
    profile_repository = ProfileRepository(store)

    privacy = PrivacyService(PrivacySettingsRepository(store))
    relationships = RelationshipService(
        relationship_repository=RelationshipRepository(store),
        profile_repository=profile_repository,
        privacy_service=privacy,
        fanout_concurrency=fanout_concurrency,
        limits=limits,
    )
    profiles = ProfileService(
        profile_repository=profile_repository,
        relationship_service=relationships,
        privacy_service=privacy,
        limits=limits,
    )
    feed = FeedService(
        workout_repository=PublicWorkoutRepository(store),
        profile_repository=profile_repository,
        relationship_service=relationships,
        privacy_service=privacy,
        stats_recorder=profiles,
        limits=limits,
        fanout_concurrency=fanout_concurrency,
    )
    for cascade in (relationships, feed, privacy):
        profiles.add_cascade(cascade)

    return SocialServices(
        profiles=profiles, relationships=relationships, feed=feed, privacy=privacy
    )


def limits_from_settings(settings: FeedSettings) -> ListLimits:
    return ListLimits(
        feed=settings.default_limit,
        search=settings.search_limit,
        suggestions=settings.suggestion_limit,
        maximum=settings.max_limit,
    )


def get_social_services(
    store: Annotated[RecordStore, Depends(get_record_store)],
    feed_settings: Annotated[FeedSettings, Depends(get_feed_settings)],
    store_settings: Annotated[RecordStoreSettings, Depends(get_record_store_settings)],
) -> SocialServices:
    """Get the social services for the current request."""
    return build_social_services(
        store,
        limits=limits_from_settings(feed_settings),
        fanout_concurrency=store_settings.fanout_concurrency,
    )


def get_profile_service(
    services: Annotated[SocialServices, Depends(get_social_services)],
) -> ProfileService:
    return services.profiles


def get_relationship_service(
    services: Annotated[SocialServices, Depends(get_social_services)],
) -> RelationshipService:
    return services.relationships


def get_feed_service(
    services: Annotated[SocialServices, Depends(get_social_services)],
) -> FeedService:
    return services.feed


def get_privacy_service(
    services: Annotated[SocialServices, Depends(get_social_services)],
) -> PrivacyService:
    return services.privacy
