"""User account operations."""

from __future__ import annotations

from beanie import PydanticObjectId

from ..core.security import hash_password
from ..models import User
from ..repositories import UserRepository


class UserService:
    def __init__(self) -> None:
        self._users = UserRepository()

    async def create_user(self, *, name: str, email: str, password: str) -> User:
        """Store a new account; only the bcrypt hash of ``password`` is kept."""
        return await self._users.add(User(name=name, email=email, hashed_password=hash_password(password)))

    async def get_user(self, user_id: PydanticObjectId) -> User | None:
        return await self._users.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._users.get_by_email(email)

    async def email_taken(self, email: str) -> bool:
        return await self.get_user_by_email(email) is not None
