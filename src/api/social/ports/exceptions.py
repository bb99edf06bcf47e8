"""Domain exceptions for the social bounded context.

Every failure mode of the social services surfaces as one of these typed
errors. Store failures keep their own types from the record store port and
are re-exported here so callers have a single import location.
"""

from shared_kernel.record_store.exceptions import (
    RecordStoreError,
    StoreTimeoutError,
    StoreUnavailableError,
)


class SocialError(Exception):
    """Base exception for social graph and feed failures."""

    pass


class NotAuthenticatedError(SocialError):
    """Raised when no identity can be resolved for the caller."""

    pass


class ProfileNotFoundError(SocialError):
    """Raised when a profile id does not resolve to a stored profile."""

    def __init__(self, profile_id: object) -> None:
        super().__init__(f"Profile {profile_id} not found")
        self.profile_id = profile_id


class UsernameTakenError(SocialError):
    """Raised when a case-folded username already belongs to another profile.

    Uniqueness is checked before the write, so this is advisory: two
    registrations racing inside the store's replication window can both
    succeed. The registry reports such collisions through its probe.
    """

    def __init__(self, username: object) -> None:
        super().__init__(f"Username '{username}' is already taken")
        self.username = username


class AlreadyRegisteredError(SocialError):
    """Raised when the identity subject already owns a profile."""

    pass


class SelfFollowError(SocialError):
    """Raised when a profile tries to follow itself."""

    pass


class AlreadyFollowingError(SocialError):
    """Raised when an edge already exists for the ordered pair."""

    pass


class NotFollowingError(SocialError):
    """Raised when unfollowing a profile without an edge to it."""

    pass


class FollowNotPermittedError(SocialError):
    """Raised when the target's follow permission or a block denies a follow."""

    pass


class RequestNotFoundError(SocialError):
    """Raised when accepting or declining a follow request that is not pending."""

    pass


class InvalidDataError(SocialError):
    """Raised when a stored record is missing a required field or is malformed.

    Single-record reads surface this error. Batch reads skip the record and
    report it instead of failing the whole batch.
    """

    def __init__(self, record_type: str, record_id: str, reason: str) -> None:
        super().__init__(f"Malformed {record_type} record {record_id}: {reason}")
        self.record_type = record_type
        self.record_id = record_id
        self.reason = reason


__all__ = [
    "AlreadyFollowingError",
    "AlreadyRegisteredError",
    "FollowNotPermittedError",
    "InvalidDataError",
    "NotAuthenticatedError",
    "NotFollowingError",
    "ProfileNotFoundError",
    "RecordStoreError",
    "RequestNotFoundError",
    "SelfFollowError",
    "SocialError",
    "StoreTimeoutError",
    "StoreUnavailableError",
    "UsernameTakenError",
]
