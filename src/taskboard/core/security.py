"""Password hashing and bearer access tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

ACCESS_TOKEN_TYPE = "access"

password_hasher = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(Exception):
    """The bearer token is malformed, expired, mis-signed or of the wrong type."""


@dataclass(slots=True)
class AccessToken:
    token: str
    subject: str
    expires_at: datetime

    def seconds_left(self, now: datetime | None = None) -> int:
        remaining = self.expires_at - (now or datetime.now(timezone.utc))
        return max(int(remaining.total_seconds()), 0)


def hash_password(password: str) -> str:
    return password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return password_hasher.verify(password, hashed_password)


def issue_access_token(
    subject: str,
    settings: Settings,
    *,
    lifetime: timedelta | None = None,
) -> AccessToken:
    """Sign a token for ``subject`` (a user id).

    Claims: ``sub``, ``iat``, ``exp``, ``type`` and a random ``jti``.
    """
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (lifetime or timedelta(minutes=settings.access_token_expire_minutes))
    claims = {
        "sub": subject,
        "iat": issued_at,
        "exp": expires_at,
        "type": ACCESS_TOKEN_TYPE,
        "jti": uuid4().hex,
    }
    encoded = jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return AccessToken(token=encoded, subject=subject, expires_at=expires_at)


def read_access_token(token: str, settings: Settings) -> str:
    """Verify ``token`` and return its subject."""
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
    subject = claims.get("sub")
    if claims.get("type") != ACCESS_TOKEN_TYPE or not isinstance(subject, str) or not subject:
        raise InvalidTokenError("Token is not an access token.")
    return subject


__all__ = [
    "ACCESS_TOKEN_TYPE",
    "AccessToken",
    "InvalidTokenError",
    "hash_password",
    "issue_access_token",
    "read_access_token",
    "verify_password",
]
