"""
Factories that bind the stores to the configured collections.
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from identity_store.config import get_settings
from identity_store.database.connections import get_database
from identity_store.stores.role_store import RoleStore
from identity_store.stores.user_store import UserStore


async def get_role_store(db: Optional[AsyncIOMotorDatabase] = None) -> RoleStore:
    """
    Build a RoleStore on the roles collection.

    Args:
        db: Database to use; defaults to the configured identity database
    """
    if db is None:
        db = await get_database()
    return RoleStore(db[get_settings().roles_collection])


async def get_user_store(db: Optional[AsyncIOMotorDatabase] = None) -> UserStore:
    """
    Build a UserStore on the users collection, sharing the database with its RoleStore.
    """
    if db is None:
        db = await get_database()
    settings = get_settings()
    return UserStore(db[settings.users_collection], await get_role_store(db))
