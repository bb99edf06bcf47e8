"""UserProfile aggregate for the social context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from social.domain.value_objects import ProfileId, SubjectId, Username

DISPLAY_NAME_MAX_LENGTH = 100


@dataclass
class UserProfile:
    """A person's public-facing identity.

    Business rules:
    - The id is derived from the identity subject and never changes
    - Usernames are case-folded; uniqueness is enforced by the registry
    - Display name must be non-empty
    - total_workouts and total_volume are client-maintained counters and
      can never go negative
    - created_at is immutable, updated_at moves on every mutation
    """

    id: ProfileId
    subject_id: SubjectId
    username: Username
    display_name: str
    bio: str
    avatar_url: str | None
    is_public: bool
    total_workouts: int
    total_volume: float
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        self.display_name = self.validate_display_name(self.display_name)
        self.validate_counters(self.total_workouts, self.total_volume)

    @staticmethod
    def validate_display_name(display_name: str) -> str:
        stripped = display_name.strip() if display_name else ""
        if not stripped:
            raise ValueError("Display name cannot be empty")
        if len(stripped) > DISPLAY_NAME_MAX_LENGTH:
            raise ValueError(
                f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters"
            )
        return stripped

    @staticmethod
    def validate_counters(total_workouts: int, total_volume: float) -> None:
        if total_workouts < 0:
            raise ValueError("total_workouts cannot be negative")
        if total_volume < 0:
            raise ValueError("total_volume cannot be negative")

    @classmethod
    def create(
        cls,
        subject_id: SubjectId,
        username: Username,
        display_name: str,
        bio: str = "",
    ) -> UserProfile:
        """Factory method for registering a new profile.

        Args:
            subject_id: Identity subject owning the profile
            username: Validated username
            display_name: Non-empty display name
            bio: Optional free text

        Returns:
            A new UserProfile with zeroed counters

        Raises:
            ValueError: If display name is empty
        """
        now = datetime.now(UTC)
        return cls(
            id=ProfileId.from_subject(subject_id),
            subject_id=subject_id,
            username=username,
            display_name=display_name,
            bio=bio or "",
            avatar_url=None,
            is_public=True,
            total_workouts=0,
            total_volume=0.0,
            created_at=now,
            updated_at=now,
        )

    def touch(self) -> None:
        """Bump updated_at."""
        self.updated_at = datetime.now(UTC)

    def change_username(self, username: Username) -> None:
        self.username = username
        self.touch()

    def change_display_name(self, display_name: str) -> None:
        self.display_name = self.validate_display_name(display_name)
        self.touch()

    def change_bio(self, bio: str) -> None:
        self.bio = bio
        self.touch()

    def change_avatar_url(self, avatar_url: str | None) -> None:
        self.avatar_url = avatar_url or None
        self.touch()

    def change_visibility(self, is_public: bool) -> None:
        self.is_public = is_public
        self.touch()

    def set_counters(
        self, total_workouts: int | None = None, total_volume: float | None = None
    ) -> None:
        """Overwrite the client-maintained counters.

        Raises:
            ValueError: If a counter would become negative
        """
        workouts = self.total_workouts if total_workouts is None else total_workouts
        volume = self.total_volume if total_volume is None else total_volume
        self.validate_counters(workouts, volume)
        self.total_workouts = workouts
        self.total_volume = volume
        self.touch()

    def record_shared_workout(self, volume: float) -> None:
        """Fold one shared workout into the counters."""
        self.set_counters(
            total_workouts=self.total_workouts + 1,
            total_volume=self.total_volume + max(volume, 0.0),
        )

    def __eq__(self, other: object) -> bool:
        """Profiles are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, UserProfile):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
