"""
Pydantic models for identity documents and their embedded entries.
"""
from identity_store.models.claim import Claim
from identity_store.models.role import IdentityRole
from identity_store.models.user import (
    IdentityUser,
    RoleSnapshot,
    UserLoginInfo,
    UserToken,
)

__all__ = [
    "Claim",
    "IdentityRole",
    "IdentityUser",
    "RoleSnapshot",
    "UserLoginInfo",
    "UserToken",
]
