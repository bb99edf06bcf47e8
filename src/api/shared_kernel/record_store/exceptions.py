"""Exceptions raised by record store implementations."""


class RecordStoreError(Exception):
    """Base exception for record store failures."""

    pass


class StoreUnavailableError(RecordStoreError):
    """Raised when the backing store cannot be reached or rejects a call.

    Wraps transport and backend failures so callers never depend on the
    concrete driver's exception types.
    """

    pass


class StoreTimeoutError(RecordStoreError):
    """Raised when a store call does not complete within its timeout."""

    pass
