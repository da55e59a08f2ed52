"""
Core module - Error taxonomy and logging setup.
"""
from identity_store.core.exceptions import (
    IdentityStoreError,
    NotFoundError,
    ConflictError,
    ConcurrencyConflictError,
    InvalidArgumentError,
    TransientStoreError,
)
from identity_store.core.logging_config import configure_logging

__all__ = [
    "IdentityStoreError",
    "NotFoundError",
    "ConflictError",
    "ConcurrencyConflictError",
    "InvalidArgumentError",
    "TransientStoreError",
    "configure_logging",
]
