"""
Identity store - user and role aggregates persisted in MongoDB.
"""
from identity_store.core.exceptions import (
    IdentityStoreError,
    NotFoundError,
    ConflictError,
    ConcurrencyConflictError,
    InvalidArgumentError,
    TransientStoreError,
)
from identity_store.models import (
    Claim,
    IdentityRole,
    IdentityUser,
    RoleSnapshot,
    UserLoginInfo,
    UserToken,
)
from identity_store.stores import RoleStore, UserStore

__all__ = [
    "IdentityStoreError",
    "NotFoundError",
    "ConflictError",
    "ConcurrencyConflictError",
    "InvalidArgumentError",
    "TransientStoreError",
    "Claim",
    "IdentityRole",
    "IdentityUser",
    "RoleSnapshot",
    "UserLoginInfo",
    "UserToken",
    "RoleStore",
    "UserStore",
]
