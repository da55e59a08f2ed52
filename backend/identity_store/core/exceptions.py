"""
Error taxonomy for identity store operations.

Every failure is surfaced directly to the caller; the store never retries.
Task cancellation is not part of this hierarchy: ``asyncio.CancelledError``
propagates out of store calls unchanged.
"""


class IdentityStoreError(Exception):
    """Base class for all identity store failures."""


class NotFoundError(IdentityStoreError, LookupError):
    """The fetched or looked-up document does not exist."""


class ConflictError(IdentityStoreError):
    """A document with the same id already exists."""


class ConcurrencyConflictError(IdentityStoreError):
    """
    The stored version token no longer matches the one the caller read.

    Re-fetch the aggregate, re-apply the change and persist again.
    """


class InvalidArgumentError(IdentityStoreError, ValueError):
    """An argument was rejected, e.g. assignment to a role that does not exist."""


class TransientStoreError(IdentityStoreError):
    """Network or service-level failure reported by the document engine."""
