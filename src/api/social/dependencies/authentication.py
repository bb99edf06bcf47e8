"""Authentication dependencies for the social API.

Every request resolves its caller exactly once; FastAPI caches the result
per request so downstream dependencies share it.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2AuthorizationCodeBearer

from infrastructure.settings import AuthMode, get_auth_settings, get_oidc_settings
from shared_kernel.auth import DefaultJWTValidatorProbe, JWTValidator
from social.application.services import IdentityResolver
from social.application.value_objects import CurrentViewer
from social.ports.exceptions import NotAuthenticatedError


def _create_oauth2_scheme() -> OAuth2AuthorizationCodeBearer:
    """OAuth2 scheme so the OpenAPI docs can obtain tokens from the provider."""
    issuer = get_oidc_settings().issuer_url.rstrip("/")
    return OAuth2AuthorizationCodeBearer(
        authorizationUrl=f"{issuer}/protocol/openid-connect/auth",
        tokenUrl=f"{issuer}/protocol/openid-connect/token",
        refreshUrl=f"{issuer}/protocol/openid-connect/token",
        scopes={"openid": "OpenID Connect", "profile": "User profile"},
        auto_error=False,
    )


oauth2_scheme = _create_oauth2_scheme()


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get the application-wide validator so its JWKS cache is shared."""
    settings = get_oidc_settings()
    return JWTValidator(
        issuer_url=settings.issuer_url,
        audience=settings.audience,
        probe=DefaultJWTValidatorProbe(issuer_url=settings.issuer_url),
        user_id_claim=settings.user_id_claim,
        username_claim=settings.username_claim,
    )


@lru_cache
def get_identity_resolver() -> IdentityResolver:
    """Get the identity resolver for the configured auth mode.

    OIDC mode validates bearer tokens. Header mode accepts X-Subject-Id
    and is meant for local development only.
    """
    if get_auth_settings().mode == AuthMode.HEADER:
        return IdentityResolver(validator=None, allow_subject_header=True)
    return IdentityResolver(validator=get_jwt_validator())


async def get_current_viewer(
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
    token: Annotated[str | None, Depends(oauth2_scheme)] = None,
    x_subject_id: Annotated[str | None, Header(alias="X-Subject-Id")] = None,
) -> CurrentViewer:
    """Resolve the caller of the current request.

    Raises:
        HTTPException 401: If no identity can be resolved
    """
    try:
        if resolver.header_mode:
            principal = resolver.resolve_subject_header(x_subject_id)
        else:
            principal = await resolver.resolve(token)
    except NotAuthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return resolver.viewer(principal)
