"""Protocol for activity feed observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class FeedServiceProbe(Protocol):
    """Domain probe for activity feed operations."""

    def workout_shared(self, owner_id: str, workout_id: str) -> None:
        """Record that a workout was shared."""
        ...

    def workout_share_failed(self, owner_id: str, error: str) -> None:
        """Record that sharing a workout failed."""
        ...

    def stats_update_failed(self, owner_id: str, error: str) -> None:
        """Record that the best-effort counter update after a share failed.

        The share itself has already succeeded and is not rolled back.
        """
        ...

    def owner_settings_unreadable(self, owner_id: str, reason: str) -> None:
        """Record that an owner's privacy settings could not be decoded.

        The owner's workouts are left out of the feed being assembled.
        """
        ...

    def feed_loaded(
        self, viewer_id: str, following_count: int, returned: int, hidden: int
    ) -> None:
        """Record that a feed was assembled."""
        ...

    def workouts_purged(self, profile_id: str, removed: int) -> None:
        """Record that every workout of a profile was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> FeedServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultFeedServiceProbe:
    """Default implementation of FeedServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultFeedServiceProbe:
        return DefaultFeedServiceProbe(logger=self._logger, context=context)

    def workout_shared(self, owner_id: str, workout_id: str) -> None:
        self._logger.info(
            "workout_shared",
            owner_id=owner_id,
            workout_id=workout_id,
            **self._get_context_kwargs(),
        )

    def workout_share_failed(self, owner_id: str, error: str) -> None:
        self._logger.error(
            "workout_share_failed",
            owner_id=owner_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def stats_update_failed(self, owner_id: str, error: str) -> None:
        self._logger.warning(
            "profile_stats_update_failed",
            owner_id=owner_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def owner_settings_unreadable(self, owner_id: str, reason: str) -> None:
        self._logger.warning(
            "feed_owner_settings_unreadable",
            owner_id=owner_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def feed_loaded(
        self, viewer_id: str, following_count: int, returned: int, hidden: int
    ) -> None:
        self._logger.debug(
            "feed_loaded",
            viewer_id=viewer_id,
            following_count=following_count,
            returned=returned,
            hidden=hidden,
            **self._get_context_kwargs(),
        )

    def workouts_purged(self, profile_id: str, removed: int) -> None:
        self._logger.info(
            "workouts_purged",
            profile_id=profile_id,
            removed=removed,
            **self._get_context_kwargs(),
        )
