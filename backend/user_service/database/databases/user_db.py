"""
User database configuration.
Stores user accounts together with the cars attached to them.

Structure:
- User: user documents, cars embedded as a bounded sub-document list
"""
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import OperationFailure

logger = logging.getLogger(__name__)


class Collections:
    """Collection names in the user database."""
    USERS = "User"
    
    # Index definitions for each collection
    INDEXES = {
        "User": [
            {"keys": [("email", 1)], "unique": True},
            {"keys": [("cars._id", 1)]},  # Car owner lookup
        ],
    }


async def create_user_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for user database collections."""
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            try:
                await collection.create_index(keys, **kwargs)
            except OperationFailure as e:
                # Index might already exist with different options
                logger.debug(f"Index exists or error on {collection_name}: {e}")
