"""
Aggregate stores for users and roles.
"""
from identity_store.stores.role_store import RoleStore
from identity_store.stores.user_store import UserStore

__all__ = [
    "RoleStore",
    "UserStore",
]
