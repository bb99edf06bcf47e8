"""Domain-Oriented Observability for social infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from social.infrastructure.observability.repository_probe import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)

__all__ = [
    "DefaultRepositoryProbe",
    "RepositoryProbe",
]
