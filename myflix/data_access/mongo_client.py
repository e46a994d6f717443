# MongoDB connection and repository logic
# myflix/data_access/mongo_client.py

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError, PyMongoError

from myflix.core.config import Settings

logger = logging.getLogger(__name__)


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Builds the Motor client with explicit timeouts.

    No I/O happens here; the first query (or ping) opens the connection.
    """
    uri = settings.MONGO_URI.get_secret_value()
    logger.info(f"Creating MongoDB client for: {uri[:15]}...")
    timeout = settings.MONGO_TIMEOUT_MS
    return AsyncIOMotorClient(
        uri,
        serverSelectionTimeoutMS=timeout,
        connectTimeoutMS=timeout,
        socketTimeoutMS=timeout,
    )


def get_database(client: AsyncIOMotorClient, fallback_name: str) -> AsyncIOMotorDatabase:
    """Returns the database named in the URI, or ``fallback_name`` if the URI names none."""
    try:
        db = client.get_default_database()
    except ConfigurationError:
        logger.warning(f"Database name not found in URI, using fallback: {fallback_name}")
        return client[fallback_name]
    return db


# --- Base Repository ---
class BaseRepository:
    """Common repository logic over a single collection."""
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[collection_name]
        logger.debug(f"Initialized repository for collection: {collection_name}")


# --- Movie Repository ---
class MovieRepository(BaseRepository):
    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db, collection_name="movies")

    async def find_all(self) -> List[Dict[str, Any]]:
        """Returns every movie document, in storage order."""
        try:
            cursor = self.collection.find({})
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"DB error listing movies: {e}", exc_info=True)
            raise


# --- User Repository ---
class UserRepository(BaseRepository):
    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db, collection_name="users")

    async def insert_one(self, user_doc: Dict[str, Any]) -> Dict[str, Any]:
        """Inserts a user document and returns it with its assigned ``_id``."""
        doc = dict(user_doc)
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"DB error inserting user {user_doc.get('Username')}: {e}", exc_info=True)
            raise
        doc["_id"] = result.inserted_id
        return doc

    async def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one({"Username": username})
        except PyMongoError as e:
            logger.error(f"DB error finding user {username}: {e}", exc_info=True)
            raise
