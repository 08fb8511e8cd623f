"""
Database module - MongoDB connection and database definitions.
"""
from user_service.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from user_service.database.databases import user_db

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "user_db",
]
