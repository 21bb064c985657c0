"""Account endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from casino_mafia_backend.api.dependencies import get_auth_service
from casino_mafia_backend.api.models import (
    AuthTokenResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
    UserSessionResponse,
)
from casino_mafia_backend.api.services import (
    AuthService,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from casino_mafia_backend.database import SessionDep, UserSchema

router = APIRouter(prefix="/auth", tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def _session_response(user: UserSchema, token: str) -> UserSessionResponse:
    return UserSessionResponse(
        user=UserResponse.model_validate(user, from_attributes=True),
        token=AuthTokenResponse(access_token=token),
    )


@router.post(
    "/register",
    response_model=UserSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_user(
    payload: UserRegisterRequest,
    session: SessionDep,
    auth_service: AuthServiceDep,
) -> UserSessionResponse:
    """Create a player account and issue an access token."""
    try:
        user, token = auth_service.register_user(
            session=session,
            nickname=payload.nickname,
            password=payload.password,
            icon=payload.icon,
        )
    except UserAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="User already exists"
        ) from exc
    return _session_response(user, token)


@router.post("/login", response_model=UserSessionResponse)
def login_user(
    payload: UserLoginRequest,
    session: SessionDep,
    auth_service: AuthServiceDep,
) -> UserSessionResponse:
    """Exchange a nickname and password for an access token."""
    try:
        user, token = auth_service.authenticate_user(
            session=session, nickname=payload.nickname, password=payload.password
        )
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        ) from exc
    return _session_response(user, token)
