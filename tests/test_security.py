from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from taskboard.core.config import Settings
from taskboard.core.security import (
    InvalidTokenError,
    hash_password,
    issue_access_token,
    read_access_token,
    verify_password,
)


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="test", jwt_secret_key="unit-test-secret")


def test_password_hash_round_trip() -> None:
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_issued_token_carries_subject_and_lifetime(settings: Settings) -> None:
    token = issue_access_token("user-1", settings, lifetime=timedelta(minutes=10))

    assert read_access_token(token.token, settings) == "user-1"
    assert 590 <= token.seconds_left() <= 600
    claims = jwt.get_unverified_claims(token.token)
    assert claims["type"] == "access"
    assert claims["jti"]


def test_seconds_left_never_negative(settings: Settings) -> None:
    token = issue_access_token("user-1", settings)

    assert token.seconds_left(now=token.expires_at + timedelta(hours=1)) == 0


def test_read_access_token_rejects_wrong_type(settings: Settings) -> None:
    now = datetime.now(timezone.utc)
    refresh = jwt.encode(
        {"sub": "user-1", "type": "refresh", "exp": now + timedelta(minutes=5)},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(InvalidTokenError):
        read_access_token(refresh, settings)


def test_read_access_token_rejects_expired_token(settings: Settings) -> None:
    token = issue_access_token("user-1", settings, lifetime=timedelta(seconds=-5))

    with pytest.raises(InvalidTokenError):
        read_access_token(token.token, settings)
