"""Protocol for identity resolution observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityProbe(Protocol):
    """Domain probe for resolving callers to subjects."""

    def identity_resolved(self, subject_id: str, method: str) -> None:
        """Record that a caller was resolved to a subject."""
        ...

    def identity_rejected(self, method: str, reason: str) -> None:
        """Record that a caller could not be resolved."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityProbe:
    """Default implementation of IdentityProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIdentityProbe:
        return DefaultIdentityProbe(logger=self._logger, context=context)

    def identity_resolved(self, subject_id: str, method: str) -> None:
        self._logger.debug(
            "identity_resolved",
            subject_id=subject_id,
            method=method,
            **self._get_context_kwargs(),
        )

    def identity_rejected(self, method: str, reason: str) -> None:
        self._logger.warning(
            "identity_rejected",
            method=method,
            reason=reason,
            **self._get_context_kwargs(),
        )
