"""Domain-Oriented Observability for the social application layer.

Probes for application service operations following Domain-Oriented
Observability patterns.
"""

from social.application.observability.feed_service_probe import (
    DefaultFeedServiceProbe,
    FeedServiceProbe,
)
from social.application.observability.identity_probe import (
    DefaultIdentityProbe,
    IdentityProbe,
)
from social.application.observability.privacy_service_probe import (
    DefaultPrivacyServiceProbe,
    PrivacyServiceProbe,
)
from social.application.observability.profile_service_probe import (
    DefaultProfileServiceProbe,
    ProfileServiceProbe,
)
from social.application.observability.relationship_service_probe import (
    DefaultRelationshipServiceProbe,
    RelationshipServiceProbe,
)

__all__ = [
    "DefaultFeedServiceProbe",
    "DefaultIdentityProbe",
    "DefaultPrivacyServiceProbe",
    "DefaultProfileServiceProbe",
    "DefaultRelationshipServiceProbe",
    "FeedServiceProbe",
    "IdentityProbe",
    "PrivacyServiceProbe",
    "ProfileServiceProbe",
    "RelationshipServiceProbe",
]
