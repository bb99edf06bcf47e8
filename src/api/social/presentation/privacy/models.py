"""Pydantic models for privacy settings."""

from __future__ import annotations

from pydantic import BaseModel

from social.domain.aggregates import SocialPrivacySettings
from social.domain.value_objects import FollowPermission, ProfileVisibility


class PrivacySettingsModel(BaseModel):
    """Privacy settings, used for both the request and the response.

    Omitted fields in a request take their default values.
    """

    profile_visibility: ProfileVisibility = ProfileVisibility.EVERYONE
    show_profile_photo: bool = True
    show_bio: bool = True
    show_workout_count: bool = True
    show_total_volume: bool = True
    show_streak: bool = True
    show_personal_records: bool = False
    auto_share_workouts: bool = False
    show_exercise_names: bool = True
    show_set_details: bool = False
    show_workout_notes: bool = False
    who_can_follow: FollowPermission = FollowPermission.EVERYONE
    allow_workout_reactions: bool = True
    allow_comments: bool = False

    @classmethod
    def from_domain(cls, settings: SocialPrivacySettings) -> PrivacySettingsModel:
        return cls(**settings.to_dict())

    def to_domain(self) -> SocialPrivacySettings:
        return SocialPrivacySettings(**self.model_dump())
