"""Domain probe for social repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events from the profile, relationship, workout and
privacy settings repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RepositoryProbe(Protocol):
    """Domain probe for social repository operations."""

    def aggregate_saved(self, record_type: str, record_id: str) -> None:
        """Record that an aggregate was persisted."""
        ...

    def aggregate_not_found(self, record_type: str, record_id: str) -> None:
        """Record that a lookup by id found nothing."""
        ...

    def aggregate_deleted(
        self, record_type: str, record_id: str, existed: bool
    ) -> None:
        """Record that an aggregate was deleted."""
        ...

    def malformed_record_skipped(
        self, record_type: str, record_id: str, reason: str
    ) -> None:
        """Record that a batch read skipped a record it could not decode."""
        ...

    def with_context(self, context: ObservationContext) -> RepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRepositoryProbe:
    """Default implementation of RepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRepositoryProbe(logger=self._logger, context=context)

    def aggregate_saved(self, record_type: str, record_id: str) -> None:
        self._logger.debug(
            "aggregate_saved",
            record_type=record_type,
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def aggregate_not_found(self, record_type: str, record_id: str) -> None:
        self._logger.debug(
            "aggregate_not_found",
            record_type=record_type,
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def aggregate_deleted(
        self, record_type: str, record_id: str, existed: bool
    ) -> None:
        self._logger.debug(
            "aggregate_deleted",
            record_type=record_type,
            record_id=record_id,
            existed=existed,
            **self._get_context_kwargs(),
        )

    def malformed_record_skipped(
        self, record_type: str, record_id: str, reason: str
    ) -> None:
        self._logger.warning(
            "malformed_record_skipped",
            record_type=record_type,
            record_id=record_id,
            reason=reason,
            **self._get_context_kwargs(),
        )
