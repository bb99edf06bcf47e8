"""Bearer token validation against an OIDC identity provider.

The identity provider is the only issuer of subject ids. Tokens are checked
against the provider's published signing keys (JWKS), which are discovered
through the OpenID configuration document and cached for a fixed TTL.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Sequence

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Claims the social service needs from a validated token.

    Attributes:
        sub: Stable subject id issued by the identity provider
        preferred_username: Username hint, if the provider sends one
    """

    sub: str
    preferred_username: str | None


class InvalidTokenError(Exception):
    """Raised when a token cannot be validated."""

    pass


def _claims_error_reason(error: JWTClaimsError) -> str:
    message = str(error).lower()
    for claim in ("audience", "issuer"):
        if claim in message:
            return f"Invalid {claim}"
    return f"Claims error: {error}"


class JWTValidator:
    """Validates signed JWTs issued by an OIDC provider.

    Signature, expiry, issuer and audience are all verified. The JWKS is
    fetched lazily on first use and refreshed once the cache TTL passes;
    concurrent requests share a single refresh.
    """

    def __init__(
        self,
        issuer_url: str,
        audience: str,
        probe: JWTValidatorProbe,
        user_id_claim: str = "sub",
        username_claim: str = "preferred_username",
        algorithms: Sequence[str] = ("RS256",),
        jwks_cache_ttl: timedelta = timedelta(hours=24),
        http_timeout_seconds: float = 5.0,
    ):
        """Initialize the validator.

        Args:
            issuer_url: OIDC issuer URL; must match the token's ``iss``
            audience: Expected ``aud`` claim
            probe: Observability probe
            user_id_claim: Claim holding the subject id
            username_claim: Claim holding the username hint
            algorithms: Accepted signing algorithms
            jwks_cache_ttl: How long fetched signing keys stay valid
            http_timeout_seconds: Timeout for discovery and JWKS requests
        """
        self._issuer_url = issuer_url.rstrip("/")
        self._audience = audience
        self._probe = probe
        self._user_id_claim = user_id_claim
        self._username_claim = username_claim
        self._algorithms = list(algorithms)
        self._jwks_cache_ttl = jwks_cache_ttl
        self._http_timeout = httpx.Timeout(http_timeout_seconds)

        self._jwks: dict[str, Any] | None = None
        self._jwks_fetched_at: datetime | None = None
        self._jwks_lock = asyncio.Lock()

    def _reject(self, reason: str, message: str) -> InvalidTokenError:
        self._probe.token_validation_failed(reason=reason)
        return InvalidTokenError(message)

    async def validate_token(self, token: str) -> TokenClaims:
        """Validate a bearer token and extract its claims.

        Raises:
            InvalidTokenError: If the token is malformed, expired, signed by an
                unknown key, issued for another audience, or missing the
                subject claim
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise self._reject(
                f"Malformed token: {e}", f"Invalid token format: {e}"
            ) from e
        if not header:
            raise self._reject("Missing token header", "Invalid token: missing header")

        jwks = await self._get_jwks()

        try:
            claims = jwt.decode(
                token=token,
                key=jwks,
                algorithms=self._algorithms,
                audience=self._audience,
                issuer=self._issuer_url,
            )
        except ExpiredSignatureError as e:
            raise self._reject("Token expired", "Token has expired") from e
        except JWTClaimsError as e:
            reason = _claims_error_reason(e)
            raise self._reject(reason, f"{reason} in token") from e
        except JWTError as e:
            reason = (
                "Invalid signature"
                if "signature" in str(e).lower()
                else f"JWT error: {e}"
            )
            raise self._reject(reason, f"Invalid token: {e}") from e

        subject = claims.get(self._user_id_claim)
        if subject is None or not str(subject).strip():
            raise self._reject(
                f"Missing {self._user_id_claim} claim",
                f"Missing required claim: {self._user_id_claim}",
            )
        username = claims.get(self._username_claim)

        self._probe.token_validated(subject_id=str(subject))
        return TokenClaims(
            sub=str(subject),
            preferred_username=str(username) if username is not None else None,
        )

    def _is_cache_valid(self) -> bool:
        if self._jwks is None or self._jwks_fetched_at is None:
            return False
        return datetime.now(UTC) - self._jwks_fetched_at < self._jwks_cache_ttl

    async def _get_jwks(self) -> dict[str, Any]:
        if self._is_cache_valid():
            self._probe.jwks_cache_hit()
            return self._jwks  # type: ignore[return-value]

        async with self._jwks_lock:
            # Another request may have refreshed while we waited
            if self._is_cache_valid():
                self._probe.jwks_cache_hit()
                return self._jwks  # type: ignore[return-value]
            return await self._fetch_jwks()

    async def _fetch_jwks(self) -> dict[str, Any]:
        """Discover the JWKS URI and fetch the signing keys.

        Raises:
            InvalidTokenError: If discovery or the key fetch fails
        """
        discovery_url = f"{self._issuer_url}/.well-known/openid-configuration"
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                discovery = await client.get(discovery_url)
                discovery.raise_for_status()
                jwks_uri = discovery.json().get("jwks_uri")
                if not jwks_uri:
                    self._probe.jwks_fetch_failed(
                        error="Missing jwks_uri in OpenID configuration"
                    )
                    raise InvalidTokenError(
                        "OIDC provider missing jwks_uri in configuration"
                    )

                response = await client.get(jwks_uri)
                response.raise_for_status()
                jwks = response.json()
        except httpx.HTTPError as e:
            self._probe.jwks_fetch_failed(error=str(e))
            raise InvalidTokenError(
                f"Failed to fetch JWKS from OIDC provider: {e}"
            ) from e
        except ValueError as e:
            self._probe.jwks_fetch_failed(error=f"Invalid JSON: {e}")
            raise InvalidTokenError(f"OIDC provider returned invalid JSON: {e}") from e

        self._jwks = jwks
        self._jwks_fetched_at = datetime.now(UTC)
        self._probe.jwks_fetched(key_count=len(jwks.get("keys", [])))
        return jwks
