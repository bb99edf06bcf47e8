"""Domain probe for bearer token validation.

Every event names the issuer it concerns, so logs from a service that
trusts one identity provider can be correlated with that provider's own.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class JWTValidatorProbe(Protocol):
    """Domain probe for token validation operations."""

    def token_validated(self, subject_id: str) -> None: ...

    def token_validation_failed(self, reason: str) -> None:
        """Record that a token was rejected. Never pass the token itself."""
        ...

    def jwks_fetched(self, key_count: int) -> None: ...

    def jwks_cache_hit(self) -> None: ...

    def jwks_fetch_failed(self, error: str) -> None: ...

    def with_context(self, context: ObservationContext) -> JWTValidatorProbe: ...


class DefaultJWTValidatorProbe:
    """structlog-backed JWTValidatorProbe.

    Args:
        issuer_url: Issuer added to every event, if known
        logger: Logger to emit to
        context: Observation context added to every event
    """

    def __init__(
        self,
        issuer_url: str | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._issuer_url = issuer_url
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        kwargs = self._context.as_dict() if self._context else {}
        if self._issuer_url:
            kwargs["issuer"] = self._issuer_url
        return kwargs

    def with_context(self, context: ObservationContext) -> DefaultJWTValidatorProbe:
        return DefaultJWTValidatorProbe(
            issuer_url=self._issuer_url, logger=self._logger, context=context
        )

    def token_validated(self, subject_id: str) -> None:
        kwargs = {**self._get_context_kwargs(), "subject_id": subject_id}
        self._logger.debug("bearer_token_validated", **kwargs)

    def token_validation_failed(self, reason: str) -> None:
        self._logger.warning(
            "bearer_token_rejected", reason=reason, **self._get_context_kwargs()
        )

    def jwks_fetched(self, key_count: int) -> None:
        self._logger.info(
            "oidc_signing_keys_fetched",
            key_count=key_count,
            **self._get_context_kwargs(),
        )

    def jwks_cache_hit(self) -> None:
        self._logger.debug("oidc_signing_keys_cached", **self._get_context_kwargs())

    def jwks_fetch_failed(self, error: str) -> None:
        self._logger.error(
            "oidc_signing_keys_fetch_failed", error=error, **self._get_context_kwargs()
        )
