"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so a feed load can be correlated with the
    store calls it fanned out into.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        viewer_id: Profile ID of the caller (if known).
        subject_id: Identity provider subject of the caller (if known).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", viewer_id="p-1")
        probe = DefaultFeedServiceProbe().with_context(context)
    """

    request_id: str | None = None
    viewer_id: str | None = None
    subject_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.viewer_id is not None:
            result["viewer_id"] = self.viewer_id
        if self.subject_id is not None:
            result["subject_id"] = self.subject_id
        result.update(self.extra)
        return result

    def with_viewer(self, viewer_id: str) -> ObservationContext:
        """Create a new context with the viewer set."""
        return ObservationContext(
            request_id=self.request_id,
            viewer_id=viewer_id,
            subject_id=self.subject_id,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            viewer_id=self.viewer_id,
            subject_id=self.subject_id,
            extra=new_extra,
        )
