# myflix/services/user_service.py

import logging
from datetime import datetime, time
from typing import Any, Dict

from bson import ObjectId
from fastapi.concurrency import run_in_threadpool

from myflix.core.security import hash_password
from myflix.data_access.mongo_client import UserRepository
from myflix.models.user import UserCreate, UserRead

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    @staticmethod
    def _to_document(user_in: UserCreate, password_digest: str) -> Dict[str, Any]:
        """Maps a validated registration onto the stored document shape."""
        doc: Dict[str, Any] = {
            "Username": user_in.username,
            "Password": password_digest,
            "Email": user_in.email,
            "FavoriteMovies": [ObjectId(mid) for mid in user_in.favorite_movies],
        }
        if user_in.birthday is not None:
            # BSON has no date-only type
            doc["Birthday"] = datetime.combine(user_in.birthday, time.min)
        return doc

    async def create_user(self, user_in: UserCreate) -> UserRead:
        """
        Registers a user. The password is replaced by its bcrypt digest before
        anything is written.

        Returns:
            The stored user, digest included.

        Raises:
            PyMongoError: If the insert fails.
        """
        digest = await run_in_threadpool(hash_password, user_in.password)
        stored = await self.repository.insert_one(self._to_document(user_in, digest))
        logger.info(f"Registered user {user_in.username} with id {stored['_id']}")
        return UserRead.model_validate(stored)
