"""Ports (interfaces) for the social bounded context.

Ports define the contracts for repositories without specifying
implementation details, keeping the domain and application layers
independent of the record store backend.
"""

from social.ports.repositories import (
    IPrivacySettingsRepository,
    IProfileRepository,
    IPublicWorkoutRepository,
    IRelationshipRepository,
)

__all__ = [
    "IPrivacySettingsRepository",
    "IProfileRepository",
    "IPublicWorkoutRepository",
    "IRelationshipRepository",
]
