import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

from myflix.api.deps import get_auth_service
from myflix.core.exceptions import StorageError
from myflix.models.common import ErrorResponse
from myflix.models.user import LoginRequest
from myflix.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter()

LOGIN_SUCCESS_MESSAGE = "Login successful"


@router.post(
    "/login",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="User Login",
    description="Confirms a username/password pair. No session or token is issued.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid username or password"},
        500: {"model": ErrorResponse, "description": "Internal server error during login"},
    },
)
async def login_user(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Handles user login. InvalidCredentialsError propagates to the error
    handler unchanged.
    """
    try:
        await auth_service.login_user(login_data)
    except PyMongoError as e:
        logger.error(f"Unexpected error during /login endpoint: {e}", exc_info=True)
        raise StorageError("An internal error occurred.")
    return PlainTextResponse(LOGIN_SUCCESS_MESSAGE, status_code=status.HTTP_200_OK)
