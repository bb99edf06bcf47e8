"""Pydantic models for profile API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from social.application.value_objects import ProfileUpdate, ProfileView
from social.domain.aggregates import UserProfile
from social.domain.value_objects import ProfileField


class CreateProfileRequest(BaseModel):
    """Request model for registering the caller's profile.

    The owning identity comes from the authenticated caller, never the body.
    """

    username: str = Field(..., description="Username (3-30 of a-z, 0-9, _)")
    display_name: str = Field(..., description="Display name")
    bio: str = Field(default="", description="Free text shown on the profile")


class UpdateProfileRequest(BaseModel):
    """Request model for a partial profile update.

    Omitted fields are left unchanged.
    """

    username: str | None = None
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    is_public: bool | None = None
    total_workouts: int | None = Field(
        default=None, description="Client-maintained workout counter"
    )
    total_volume: float | None = Field(
        default=None, description="Client-maintained lifetime volume"
    )

    def to_update(self) -> ProfileUpdate:
        return ProfileUpdate(
            username=self.username,
            display_name=self.display_name,
            bio=self.bio,
            avatar_url=self.avatar_url,
            is_public=self.is_public,
            total_workouts=self.total_workouts,
            total_volume=self.total_volume,
        )


class ProfileResponse(BaseModel):
    """Full profile, returned only to its owner."""

    id: str = Field(..., description="Profile ID")
    username: str
    display_name: str
    bio: str
    avatar_url: str | None
    is_public: bool
    total_workouts: int
    total_volume: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, profile: UserProfile) -> ProfileResponse:
        """Convert domain UserProfile aggregate to API response.

        Args:
            profile: UserProfile domain aggregate

        Returns:
            ProfileResponse with every profile field
        """
        return cls(
            id=profile.id.value,
            username=profile.username.value,
            display_name=profile.display_name,
            bio=profile.bio,
            avatar_url=profile.avatar_url,
            is_public=profile.is_public,
            total_workouts=profile.total_workouts,
            total_volume=profile.total_volume,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class ProfileViewResponse(BaseModel):
    """A profile as another user is allowed to see it.

    Hidden fields are null; ``visible_fields`` lists what was shown.
    """

    id: str
    username: str
    display_name: str
    bio: str | None = None
    avatar_url: str | None = None
    total_workouts: int | None = None
    total_volume: float | None = None
    is_public: bool
    visible_fields: list[ProfileField] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: ProfileView) -> ProfileViewResponse:
        return cls(
            id=view.id.value,
            username=view.username,
            display_name=view.display_name,
            bio=view.bio,
            avatar_url=view.avatar_url,
            total_workouts=view.total_workouts,
            total_volume=view.total_volume,
            is_public=view.is_public,
            visible_fields=sorted(view.visible_fields),
        )


class ProfileSummaryResponse(BaseModel):
    """Identity-only profile entry used in search results and lists."""

    id: str
    username: str
    display_name: str

    @classmethod
    def from_domain(cls, profile: UserProfile) -> ProfileSummaryResponse:
        return cls(
            id=profile.id.value,
            username=profile.username.value,
            display_name=profile.display_name,
        )
