"""Application services for the social bounded context.

Application services orchestrate domain aggregates and repositories to
fulfill use cases. They are the "front door" to the social context.
"""

from social.application.services.feed_service import FeedService
from social.application.services.identity_resolver import IdentityResolver
from social.application.services.privacy_service import PrivacyService
from social.application.services.profile_service import ProfileService
from social.application.services.relationship_service import RelationshipService

__all__ = [
    "FeedService",
    "IdentityResolver",
    "PrivacyService",
    "ProfileService",
    "RelationshipService",
]
