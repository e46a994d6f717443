# myflix/api/endpoints/users.py

import logging

from fastapi import APIRouter, Depends, status
from pymongo.errors import PyMongoError

from myflix.api.deps import get_user_service
from myflix.core.exceptions import StorageError
from myflix.models.common import ErrorResponse
from myflix.models.user import UserCreate, UserRead
from myflix.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "",  # POST /users
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register User",
    description="Creates a user. The password is stored as a bcrypt digest, which is echoed back.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input data or database error"},
    },
)
async def create_user(
    user_in: UserCreate,
    user_service: UserService = Depends(get_user_service),
):
    try:
        return await user_service.create_user(user_in)
    except PyMongoError as e:
        logger.error(f"Error registering user {user_in.username}: {e}", exc_info=True)
        raise StorageError(
            "An error occurred while saving the user.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
