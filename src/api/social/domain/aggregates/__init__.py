"""Social domain aggregates.

Aggregates are consistency boundaries in the domain model. Each aggregate
maps to exactly one record type in the record store, and writes never span
more than one record.
"""

from social.domain.aggregates.friend_relationship import FriendRelationship
from social.domain.aggregates.privacy_settings import SocialPrivacySettings
from social.domain.aggregates.public_workout import PublicWorkout
from social.domain.aggregates.user_profile import UserProfile

__all__ = [
    "FriendRelationship",
    "PublicWorkout",
    "SocialPrivacySettings",
    "UserProfile",
]
