"""Routes handling user registration, sign-in and profile lookup."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...core.security import AccessToken
from ...deps import CurrentUserDependency, SettingsDependency
from ...models import User
from ...schemas import AuthResponse, AuthTokens, SigninRequest, SignupRequest, UserPublic
from ...services import AuthService

router = APIRouter(prefix="/users", tags=["users"])


def _build_tokens(token: AccessToken) -> AuthTokens:
    return AuthTokens(access_token=token.token, expires_in=token.seconds_left())


def _map_user(user: User) -> UserPublic:
    return UserPublic.model_validate(user)


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def signup(payload: SignupRequest, settings: SettingsDependency) -> AuthResponse:
    service = AuthService(settings)
    user = await service.register_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(user=_map_user(user), tokens=_build_tokens(service.issue_token(user)))


@router.post(
    "/signin",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate using email and password",
)
async def signin(payload: SigninRequest, settings: SettingsDependency) -> AuthResponse:
    service = AuthService(settings)
    user = await service.authenticate_user(payload.email, payload.password)
    return AuthResponse(user=_map_user(user), tokens=_build_tokens(service.issue_token(user)))


@router.get("/profile", response_model=UserPublic, summary="Return the authenticated user")
async def read_profile(current_user: CurrentUserDependency) -> UserPublic:
    return _map_user(current_user)
