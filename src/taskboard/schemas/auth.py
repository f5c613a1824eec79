"""Bodies exchanged by the signup and signin routes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .user import UserPublic


class SignupRequest(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "password": "s3cret!",
            }
        },
    )

    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6)


class SigninRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(min_length=1)


class AuthTokens(BaseModel):
    """Bearer credential returned to clients."""

    access_token: str
    token_type: str = Field(default="bearer", frozen=True)
    expires_in: int


class AuthResponse(BaseModel):
    """Returned by signup and signin alike."""

    user: UserPublic
    tokens: AuthTokens


__all__ = ["AuthResponse", "AuthTokens", "SigninRequest", "SignupRequest"]
