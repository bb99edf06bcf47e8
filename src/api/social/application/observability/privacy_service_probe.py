"""Protocol for privacy settings observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PrivacyServiceProbe(Protocol):
    """Domain probe for privacy settings operations."""

    def settings_updated(self, profile_id: str, preset: str | None) -> None:
        """Record that a profile's privacy settings were replaced."""
        ...

    def settings_purged(self, profile_id: str) -> None:
        """Record that a profile's privacy settings were deleted."""
        ...

    def with_context(self, context: ObservationContext) -> PrivacyServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPrivacyServiceProbe:
    """Default implementation of PrivacyServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPrivacyServiceProbe:
        return DefaultPrivacyServiceProbe(logger=self._logger, context=context)

    def settings_updated(self, profile_id: str, preset: str | None) -> None:
        self._logger.info(
            "privacy_settings_updated",
            profile_id=profile_id,
            preset=preset,
            **self._get_context_kwargs(),
        )

    def settings_purged(self, profile_id: str) -> None:
        self._logger.info(
            "privacy_settings_purged",
            profile_id=profile_id,
            **self._get_context_kwargs(),
        )
