"""Protocol for profile registry observability.

Defines the interface for domain probes that capture application-level
domain events for profile operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Sequence

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProfileServiceProbe(Protocol):
    """Domain probe for profile registry operations."""

    def profile_created(self, profile_id: str, username: str) -> None:
        """Record that a profile was registered."""
        ...

    def profile_creation_failed(
        self, subject_id: str, username: str, error: str
    ) -> None:
        """Record that registering a profile failed."""
        ...

    def username_collision_detected(
        self, username: str, profile_ids: Sequence[str]
    ) -> None:
        """Record that more than one profile holds the same username.

        Happens when two registrations race inside the store's replication
        window. Nothing is repaired automatically.
        """
        ...

    def profile_updated(self, profile_id: str, fields: Sequence[str]) -> None:
        """Record that a profile was updated."""
        ...

    def profile_update_failed(self, profile_id: str, error: str) -> None:
        """Record that updating a profile failed."""
        ...

    def profile_deleted(self, profile_id: str) -> None:
        """Record that a profile and its dependents were deleted."""
        ...

    def profiles_searched(self, viewer_id: str, result_count: int) -> None:
        """Record that a profile search ran."""
        ...

    def with_context(self, context: ObservationContext) -> ProfileServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProfileServiceProbe:
    """Default implementation of ProfileServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultProfileServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultProfileServiceProbe(logger=self._logger, context=context)

    def profile_created(self, profile_id: str, username: str) -> None:
        """Record that a profile was registered."""
        self._logger.info(
            "profile_created",
            profile_id=profile_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def profile_creation_failed(
        self, subject_id: str, username: str, error: str
    ) -> None:
        """Record that registering a profile failed."""
        self._logger.error(
            "profile_creation_failed",
            subject_id=subject_id,
            username=username,
            error=error,
            **self._get_context_kwargs(),
        )

    def username_collision_detected(
        self, username: str, profile_ids: Sequence[str]
    ) -> None:
        """Record that more than one profile holds the same username."""
        self._logger.warning(
            "username_collision_detected",
            username=username,
            profile_ids=list(profile_ids),
            **self._get_context_kwargs(),
        )

    def profile_updated(self, profile_id: str, fields: Sequence[str]) -> None:
        """Record that a profile was updated."""
        self._logger.info(
            "profile_updated",
            profile_id=profile_id,
            fields=list(fields),
            **self._get_context_kwargs(),
        )

    def profile_update_failed(self, profile_id: str, error: str) -> None:
        """Record that updating a profile failed."""
        self._logger.error(
            "profile_update_failed",
            profile_id=profile_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def profile_deleted(self, profile_id: str) -> None:
        """Record that a profile and its dependents were deleted."""
        self._logger.info(
            "profile_deleted",
            profile_id=profile_id,
            **self._get_context_kwargs(),
        )

    def profiles_searched(self, viewer_id: str, result_count: int) -> None:
        """Record that a profile search ran."""
        self._logger.debug(
            "profiles_searched",
            viewer_id=viewer_id,
            result_count=result_count,
            **self._get_context_kwargs(),
        )
