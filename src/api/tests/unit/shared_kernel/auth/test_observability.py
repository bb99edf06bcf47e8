"""Unit tests for the JWT validator probe."""

from unittest.mock import MagicMock

from shared_kernel.auth import DefaultJWTValidatorProbe
from shared_kernel.observability_context import ObservationContext

ISSUER = "https://auth.example.com/realms/social"


class TestDefaultJWTValidatorProbe:
    def test_events_carry_issuer(self):
        logger = MagicMock()
        probe = DefaultJWTValidatorProbe(issuer_url=ISSUER, logger=logger)

        probe.token_validation_failed(reason="Token expired")

        logger.warning.assert_called_once_with(
            "bearer_token_rejected", reason="Token expired", issuer=ISSUER
        )

    def test_context_subject_does_not_clash_with_validated_subject(self):
        logger = MagicMock()
        probe = DefaultJWTValidatorProbe(logger=logger).with_context(
            ObservationContext(request_id="req-1", subject_id="stale")
        )

        probe.token_validated(subject_id="subject-123")

        logger.debug.assert_called_once_with(
            "bearer_token_validated", request_id="req-1", subject_id="subject-123"
        )

    def test_with_context_keeps_issuer(self):
        logger = MagicMock()
        probe = DefaultJWTValidatorProbe(issuer_url=ISSUER, logger=logger)

        probe.with_context(ObservationContext(request_id="req-2")).jwks_cache_hit()

        logger.debug.assert_called_once_with(
            "oidc_signing_keys_cached", request_id="req-2", issuer=ISSUER
        )
