"""Sign-up and sign-in workflows."""

from __future__ import annotations

import logging

from ..core.config import Settings
from ..core.security import AccessToken, issue_access_token, verify_password
from ..errors import ApplicationError, NotAuthorizedError
from ..models import User
from .users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Registers accounts, checks credentials and issues access tokens."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._users = UserService()

    async def register_user(self, *, name: str, email: str, password: str) -> User:
        if await self._users.email_taken(email):
            logger.info("Sign-up rejected for existing email")
            raise ApplicationError("User already exists", code="user_exists")
        user = await self._users.create_user(name=name, email=email, password=password)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """Return the account for valid credentials.

        Unknown emails and wrong passwords fail identically.
        """
        user = await self._users.get_user_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("Sign-in rejected", extra={"email": email.strip().lower()})
            raise NotAuthorizedError("Invalid email or password", challenge=True)
        logger.info("User signed in", extra={"user_id": str(user.id)})
        return user

    def issue_token(self, user: User) -> AccessToken:
        return issue_access_token(str(user.id), self._settings)


__all__ = ["AuthService"]
