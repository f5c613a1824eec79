"""FastAPI dependencies resolving settings and the calling user."""

from __future__ import annotations

from typing import Annotated

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from .core.config import Settings, get_settings
from .core.security import InvalidTokenError, read_access_token
from .errors import NotAuthorizedError
from .models import User
from .services import UserService

SettingsDependency = Annotated[Settings, Depends(get_settings)]

bearer_token = OAuth2PasswordBearer(tokenUrl="/api/users/signin", auto_error=False)

TOKEN_MISSING = "Not authorized, no token"
TOKEN_FAILED = "Not authorized, token failed"


async def get_current_user(
    token: Annotated[str | None, Depends(bearer_token)],
    settings: SettingsDependency,
) -> User:
    """Resolve the bearer token into the calling ``User``.

    Missing, invalid or expired tokens and tokens for deleted users all yield
    401 with a ``WWW-Authenticate: Bearer`` challenge.
    """
    if not token:
        raise NotAuthorizedError(TOKEN_MISSING, challenge=True)
    try:
        user_id = PydanticObjectId(read_access_token(token, settings))
    except (InvalidTokenError, InvalidId, TypeError) as exc:
        raise NotAuthorizedError(TOKEN_FAILED, challenge=True) from exc

    user = await UserService().get_user(user_id)
    if user is None:
        raise NotAuthorizedError(TOKEN_FAILED, challenge=True)
    return user


CurrentUserDependency = Annotated[User, Depends(get_current_user)]


def require_user_id(user: User) -> PydanticObjectId:
    if user.id is None:  # pragma: no cover - stored documents always carry an id
        raise NotAuthorizedError(TOKEN_FAILED, challenge=True)
    return user.id


__all__ = [
    "CurrentUserDependency",
    "SettingsDependency",
    "get_current_user",
    "require_user_id",
]
