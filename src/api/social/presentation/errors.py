"""Translation of social errors into HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from social.ports.exceptions import (
    AlreadyFollowingError,
    AlreadyRegisteredError,
    FollowNotPermittedError,
    InvalidDataError,
    NotAuthenticatedError,
    NotFollowingError,
    ProfileNotFoundError,
    RequestNotFoundError,
    SelfFollowError,
    StoreTimeoutError,
    StoreUnavailableError,
    UsernameTakenError,
)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (SelfFollowError, status.HTTP_400_BAD_REQUEST),
    (ValueError, status.HTTP_400_BAD_REQUEST),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (FollowNotPermittedError, status.HTTP_403_FORBIDDEN),
    (ProfileNotFoundError, status.HTTP_404_NOT_FOUND),
    (NotFollowingError, status.HTTP_404_NOT_FOUND),
    (RequestNotFoundError, status.HTTP_404_NOT_FOUND),
    (UsernameTakenError, status.HTTP_409_CONFLICT),
    (AlreadyRegisteredError, status.HTTP_409_CONFLICT),
    (AlreadyFollowingError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StoreTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
)


def to_http_exception(error: Exception, fallback: str) -> HTTPException:
    """Map a service error to the HTTPException the API returns for it.

    Args:
        error: Exception raised by a social service
        fallback: Detail used for unexpected errors, which are not echoed

    Returns:
        HTTPException with the matching status code
    """
    if isinstance(error, InvalidDataError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Stored {error.record_type} record is malformed",
        )
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            headers = (
                {"WWW-Authenticate": "Bearer"}
                if status_code == status.HTTP_401_UNAUTHORIZED
                else None
            )
            return HTTPException(
                status_code=status_code, detail=str(error), headers=headers
            )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=fallback
    )
