"""Protocol for relationship graph observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RelationshipServiceProbe(Protocol):
    """Domain probe for relationship graph operations."""

    def followed(self, follower_id: str, following_id: str, outcome: str) -> None:
        """Record that a follow call created or kept an edge."""
        ...

    def follow_failed(self, follower_id: str, following_id: str, error: str) -> None:
        """Record that a follow call failed."""
        ...

    def duplicate_edges_resolved(
        self, follower_id: str, following_id: str, removed: int
    ) -> None:
        """Record that racing follows left duplicates which were removed."""
        ...

    def unfollowed(self, follower_id: str, following_id: str) -> None:
        """Record that an edge was removed by its follower."""
        ...

    def follow_request_resolved(
        self, follower_id: str, following_id: str, accepted: bool
    ) -> None:
        """Record that a pending request was accepted or declined."""
        ...

    def follower_blocked(self, target_id: str, follower_id: str) -> None:
        """Record that a target blocked a follower."""
        ...

    def follower_unblocked(self, target_id: str, follower_id: str) -> None:
        """Record that a target lifted a block."""
        ...

    def relationships_purged(self, profile_id: str, removed: int) -> None:
        """Record that every edge touching a profile was deleted."""
        ...

    def profile_unresolved(self, profile_id: str, reason: str) -> None:
        """Record that an edge pointed at a missing or unreadable profile."""
        ...

    def with_context(self, context: ObservationContext) -> RelationshipServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRelationshipServiceProbe:
    """Default implementation of RelationshipServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultRelationshipServiceProbe:
        return DefaultRelationshipServiceProbe(logger=self._logger, context=context)

    def followed(self, follower_id: str, following_id: str, outcome: str) -> None:
        self._logger.info(
            "profile_followed",
            follower_id=follower_id,
            following_id=following_id,
            outcome=outcome,
            **self._get_context_kwargs(),
        )

    def follow_failed(self, follower_id: str, following_id: str, error: str) -> None:
        self._logger.warning(
            "profile_follow_failed",
            follower_id=follower_id,
            following_id=following_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def duplicate_edges_resolved(
        self, follower_id: str, following_id: str, removed: int
    ) -> None:
        self._logger.warning(
            "duplicate_edges_resolved",
            follower_id=follower_id,
            following_id=following_id,
            removed=removed,
            **self._get_context_kwargs(),
        )

    def unfollowed(self, follower_id: str, following_id: str) -> None:
        self._logger.info(
            "profile_unfollowed",
            follower_id=follower_id,
            following_id=following_id,
            **self._get_context_kwargs(),
        )

    def follow_request_resolved(
        self, follower_id: str, following_id: str, accepted: bool
    ) -> None:
        self._logger.info(
            "follow_request_resolved",
            follower_id=follower_id,
            following_id=following_id,
            accepted=accepted,
            **self._get_context_kwargs(),
        )

    def follower_blocked(self, target_id: str, follower_id: str) -> None:
        self._logger.info(
            "follower_blocked",
            target_id=target_id,
            follower_id=follower_id,
            **self._get_context_kwargs(),
        )

    def follower_unblocked(self, target_id: str, follower_id: str) -> None:
        self._logger.info(
            "follower_unblocked",
            target_id=target_id,
            follower_id=follower_id,
            **self._get_context_kwargs(),
        )

    def relationships_purged(self, profile_id: str, removed: int) -> None:
        self._logger.info(
            "relationships_purged",
            profile_id=profile_id,
            removed=removed,
            **self._get_context_kwargs(),
        )

    def profile_unresolved(self, profile_id: str, reason: str) -> None:
        self._logger.warning(
            "edge_profile_unresolved",
            profile_id=profile_id,
            reason=reason,
            **self._get_context_kwargs(),
        )
