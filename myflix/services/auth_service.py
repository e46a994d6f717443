import logging

from fastapi.concurrency import run_in_threadpool

from myflix.core.exceptions import InvalidCredentialsError
from myflix.core.security import verify_password
from myflix.data_access.mongo_client import UserRepository
from myflix.models.user import LoginRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Checks submitted credentials against stored users. Issues no tokens."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def login_user(self, login_data: LoginRequest) -> None:
        """
        Confirms that the username exists and the password matches its digest.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password; the two
                cases are indistinguishable to the caller.
            PyMongoError: If the lookup fails.
        """
        logger.info(f"Attempting login for user: {login_data.username}")
        user = await self.repository.find_by_username(login_data.username)
        if user is None:
            logger.warning(f"Login failed for {login_data.username}: unknown user")
            raise InvalidCredentialsError()

        matches = await run_in_threadpool(verify_password, login_data.password, user.get("Password"))
        if not matches:
            logger.warning(f"Login failed for {login_data.username}: wrong password")
            raise InvalidCredentialsError()

        logger.info(f"Successfully logged in user: {user['_id']} ({login_data.username})")
