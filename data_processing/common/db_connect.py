# Functions to connect to MongoDB from command-line tooling
# data_processing/common/db_connect.py

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError, ConnectionFailure

logger = logging.getLogger(__name__)

# Load environment variables from .env file in the working directory
load_dotenv()

FALLBACK_DB_NAME = "myflix"


def get_mongo_uri() -> str:
    """
    Reads the connection string from MONGO_URI (or MONGODB_URI).

    Raises:
        ValueError: If neither variable is set.
    """
    mongodb_uri = os.environ.get("MONGO_URI") or os.environ.get("MONGODB_URI")
    if not mongodb_uri:
        logger.critical("MONGO_URI environment variable not set.")
        raise ValueError("MONGO_URI environment variable is required.")
    return mongodb_uri


def get_mongo_client(mongodb_uri: Optional[str] = None, timeout_ms: int = 5000) -> MongoClient:
    """
    Establishes and returns a pymongo MongoClient instance.

    Returns:
        A MongoClient instance that has answered a ping.

    Raises:
        ConnectionFailure: If the connection to MongoDB fails.
        ConfigurationError: If the URI is invalid.
        ValueError: If no URI is given and MONGO_URI is not set.
    """
    mongodb_uri = mongodb_uri or get_mongo_uri()
    logger.info(f"Connecting to MongoDB at {mongodb_uri[:15]}...")
    try:
        client = MongoClient(mongodb_uri, serverSelectionTimeoutMS=timeout_ms)
        client.admin.command('ping')
        logger.info("MongoDB connection successful.")
        return client
    except ConfigurationError as e:
        logger.critical(f"MongoDB configuration error: {e}", exc_info=True)
        raise
    except ConnectionFailure as e:
        logger.critical(f"MongoDB connection failed: {e}", exc_info=True)
        raise


def get_mongo_database(client: MongoClient, db_name: Optional[str] = None) -> Database:
    """
    Returns the named database, else the one in the URI, else ``myflix``.
    """
    if db_name:
        logger.debug(f"Using provided database name: {db_name}")
        return client[db_name]
    try:
        default_db = client.get_default_database()
        logger.debug(f"Using database name from URI: {default_db.name}")
        return default_db
    except ConfigurationError:
        logger.warning(f"Database name not found in URI, using fallback: {FALLBACK_DB_NAME}")
        return client[FALLBACK_DB_NAME]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        mongo_client = get_mongo_client()
        db = get_mongo_database(mongo_client)
        print(f"Successfully connected to database: {db.name}")
        print(f"Collections: {db.list_collection_names()}")
        mongo_client.close()
    except (ValueError, ConnectionFailure, ConfigurationError) as e:
        print(f"Failed to connect to MongoDB: {e}", file=sys.stderr)
        sys.exit(1)
