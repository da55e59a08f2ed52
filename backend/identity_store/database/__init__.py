"""
Database module - MongoDB connection management.
"""
from identity_store.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
]
