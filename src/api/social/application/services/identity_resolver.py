"""Identity resolution for the social bounded context.

Maps an authenticated caller to the stable subject id issued by the
external identity provider, and the subject id to its profile id. Identity
issuance itself is out of scope: this service only validates what the
provider hands out.
"""

from __future__ import annotations

from social.application.observability import DefaultIdentityProbe, IdentityProbe
from social.application.value_objects import CurrentViewer, Principal
from social.domain.value_objects import ProfileId, SubjectId
from social.ports.exceptions import NotAuthenticatedError

from shared_kernel.auth import InvalidTokenError, JWTValidator


class IdentityResolver:
    """Resolves bearer tokens (or, in development, a subject header).

    Header mode trusts the caller to name its own subject and must only be
    enabled behind a gateway that sets the header itself.
    """

    def __init__(
        self,
        validator: JWTValidator | None = None,
        allow_subject_header: bool = False,
        probe: IdentityProbe | None = None,
    ):
        """Initialize IdentityResolver.

        Args:
            validator: Token validator; None disables bearer authentication
            allow_subject_header: Accept a plain subject id header
            probe: Optional domain probe for observability
        """
        self._validator = validator
        self._allow_subject_header = allow_subject_header
        self._probe = probe or DefaultIdentityProbe()

    @property
    def header_mode(self) -> bool:
        return self._allow_subject_header

    async def resolve(self, token: str | None) -> Principal:
        """Resolve a bearer token to a principal.

        Raises:
            NotAuthenticatedError: If the token is missing or invalid
        """
        if not token:
            self._probe.identity_rejected("bearer", "missing token")
            raise NotAuthenticatedError("Missing bearer token")
        if self._validator is None:
            self._probe.identity_rejected("bearer", "bearer auth disabled")
            raise NotAuthenticatedError("Bearer authentication is not configured")

        try:
            claims = await self._validator.validate_token(token)
        except InvalidTokenError as e:
            self._probe.identity_rejected("bearer", str(e))
            raise NotAuthenticatedError(str(e)) from e

        self._probe.identity_resolved(claims.sub, "bearer")
        return Principal(
            subject_id=SubjectId(claims.sub),
            username_hint=claims.preferred_username,
        )

    def resolve_subject_header(self, subject: str | None) -> Principal:
        """Resolve a development subject header to a principal.

        Raises:
            NotAuthenticatedError: If header mode is off or the header is blank
        """
        if not self._allow_subject_header:
            self._probe.identity_rejected("header", "header auth disabled")
            raise NotAuthenticatedError("Subject header authentication is disabled")
        if subject is None or not subject.strip():
            self._probe.identity_rejected("header", "missing subject")
            raise NotAuthenticatedError("Missing subject header")

        self._probe.identity_resolved(subject.strip(), "header")
        return Principal(subject_id=SubjectId(subject.strip()))

    @staticmethod
    def current_profile_id(principal: Principal) -> ProfileId:
        """Profile id owned by a principal (deterministic, 1:1)."""
        return ProfileId.from_subject(principal.subject_id)

    def viewer(self, principal: Principal) -> CurrentViewer:
        return CurrentViewer(
            principal=principal, profile_id=self.current_profile_id(principal)
        )
