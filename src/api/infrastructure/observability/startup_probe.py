"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def record_store_ready(self, backend: str, timeout_seconds: float) -> None:
        """Record that the record store was created at startup."""
        ...

    def header_auth_enabled(self) -> None:
        """Record that the development header authentication is active."""
        ...

    def shutdown_completed(self) -> None:
        """Record that the application released its resources."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def record_store_ready(self, backend: str, timeout_seconds: float) -> None:
        """Record that the record store was created at startup."""
        self._logger.info(
            "record_store_ready",
            backend=backend,
            timeout_seconds=timeout_seconds,
            **self._get_context_kwargs(),
        )

    def header_auth_enabled(self) -> None:
        """Record that the development header authentication is active."""
        self._logger.warning(
            "header_auth_enabled",
            detail="X-Subject-Id is trusted without verification",
            **self._get_context_kwargs(),
        )

    def shutdown_completed(self) -> None:
        """Record that the application released its resources."""
        self._logger.info(
            "shutdown_completed",
            **self._get_context_kwargs(),
        )
