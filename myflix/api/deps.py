# FastAPI dependencies and client lifecycle
# myflix/api/deps.py

import logging

from fastapi import Depends, FastAPI, Request
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from myflix.core.config import Settings
from myflix.core.exceptions import ServiceUnavailableError
from myflix.data_access.mongo_client import (
    MovieRepository,
    UserRepository,
    create_mongo_client,
    get_database,
)
from myflix.data_access.storage_client import ObjectStorageClient
from myflix.services.auth_service import AuthService
from myflix.services.image_service import ImageService
from myflix.services.movie_service import MovieService
from myflix.services.user_service import UserService

logger = logging.getLogger(__name__)


# --- Client Lifecycle (called from the app lifespan) ---

async def initialize_connections(app: FastAPI, settings: Settings) -> None:
    """
    Builds the MongoDB and object storage clients and stores them on ``app.state``.

    The bucket is provisioned here, before the server accepts requests. Neither
    an unreachable database nor a failed provisioning stops startup; requests
    that need them fail individually.
    """
    logger.info("Initializing external connections...")

    # --- MongoDB Initialization ---
    mongo_client = create_mongo_client(settings)
    app.state.mongo_client = mongo_client
    app.state.db = get_database(mongo_client, settings.MONGO_DB_FALLBACK)
    try:
        await mongo_client.admin.command('ping')
        app.state.database_ready = True
        logger.info(f"MongoDB client initialized successfully. Using database: '{app.state.db.name}'")
    except PyMongoError as e:
        app.state.database_ready = False
        logger.error(f"MongoDB ping failed during initialization: {e}", exc_info=True)

    # --- Object Storage Initialization ---
    storage = ObjectStorageClient.from_settings(settings)
    app.state.storage = storage
    app.state.bucket_ready = await storage.ensure_bucket()
    if app.state.bucket_ready:
        logger.info(f"Object storage ready. Using bucket: '{storage.bucket_name}'")
    else:
        logger.error("Object storage bucket could not be provisioned; uploads will fail until it exists.")


async def close_connections(app: FastAPI) -> None:
    logger.info("Closing external connections...")
    mongo_client = getattr(app.state, "mongo_client", None)
    if mongo_client is not None:
        mongo_client.close()
        logger.info("MongoDB client closed.")


# --- Client Dependencies ---

async def get_db(request: Request) -> AsyncIOMotorDatabase:
    """
    Yields the application's MongoDB database instance.

    Raises:
        ServiceUnavailableError: If the database was never initialized.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        logger.critical("MongoDB database instance is not available. Check initialization.")
        raise ServiceUnavailableError("Database service not available.")
    return db


async def get_storage_client(request: Request) -> ObjectStorageClient:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        logger.critical("Object storage client is not available. Check initialization.")
        raise ServiceUnavailableError("Object storage service not available.")
    return storage


def get_movie_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> MovieRepository:
    return MovieRepository(db)


def get_user_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


# --- Service Dependencies ---

def get_movie_service(repository: MovieRepository = Depends(get_movie_repository)) -> MovieService:
    return MovieService(repository)


def get_user_service(repository: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repository)


def get_auth_service(repository: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(repository)


def get_image_service(storage: ObjectStorageClient = Depends(get_storage_client)) -> ImageService:
    return ImageService(storage)
