"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RecordStoreProbe(Protocol):
    """Domain probe for record store observability.

    Captures domain-significant events around calls to the backing store
    without exposing logging implementation details.
    """

    def record_saved(self, record_type: str, record_id: str) -> None:
        """Record that a record was written."""
        ...

    def record_deleted(self, record_type: str, record_id: str, existed: bool) -> None:
        """Record that a record delete was issued."""
        ...

    def query_executed(self, record_type: str, result_count: int) -> None:
        """Record that a query returned results."""
        ...

    def call_failed(self, operation: str, record_type: str, error: Exception) -> None:
        """Record that a store call failed in the backend."""
        ...

    def call_timed_out(
        self, operation: str, record_type: str, timeout_seconds: float
    ) -> None:
        """Record that a store call exceeded its timeout."""
        ...

    def schema_created(self, backend: str) -> None:
        """Record that the backing schema was ensured."""
        ...

    def store_closed(self, backend: str) -> None:
        """Record that the store released its connections."""
        ...

    def with_context(self, context: ObservationContext) -> RecordStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRecordStoreProbe:
    """Default implementation of RecordStoreProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultRecordStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultRecordStoreProbe(logger=self._logger, context=context)

    def record_saved(self, record_type: str, record_id: str) -> None:
        """Record that a record was written."""
        self._logger.debug(
            "record_saved",
            record_type=record_type,
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def record_deleted(self, record_type: str, record_id: str, existed: bool) -> None:
        """Record that a record delete was issued."""
        self._logger.debug(
            "record_deleted",
            record_type=record_type,
            record_id=record_id,
            existed=existed,
            **self._get_context_kwargs(),
        )

    def query_executed(self, record_type: str, result_count: int) -> None:
        """Record that a query returned results."""
        self._logger.debug(
            "record_query_executed",
            record_type=record_type,
            result_count=result_count,
            **self._get_context_kwargs(),
        )

    def call_failed(self, operation: str, record_type: str, error: Exception) -> None:
        """Record that a store call failed in the backend."""
        self._logger.error(
            "record_store_call_failed",
            operation=operation,
            record_type=record_type,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def call_timed_out(
        self, operation: str, record_type: str, timeout_seconds: float
    ) -> None:
        """Record that a store call exceeded its timeout."""
        self._logger.warning(
            "record_store_call_timed_out",
            operation=operation,
            record_type=record_type,
            timeout_seconds=timeout_seconds,
            **self._get_context_kwargs(),
        )

    def schema_created(self, backend: str) -> None:
        """Record that the backing schema was ensured."""
        self._logger.info(
            "record_store_schema_created",
            backend=backend,
            **self._get_context_kwargs(),
        )

    def store_closed(self, backend: str) -> None:
        """Record that the store released its connections."""
        self._logger.info(
            "record_store_closed",
            backend=backend,
            **self._get_context_kwargs(),
        )
