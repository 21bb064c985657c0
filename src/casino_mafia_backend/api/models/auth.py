"""Pydantic models for player account endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from casino_mafia_backend.shared import AvatarIcon

NICKNAME_PATTERN = r"^[A-Za-z0-9_]{3,32}$"
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 64


def _check_password(value: str) -> str:
    if not any(char.isalpha() for char in value):
        msg = "password must contain at least one letter"
        raise ValueError(msg)
    if not any(char.isdigit() for char in value):
        msg = "password must contain at least one digit"
        raise ValueError(msg)
    return value


Nickname = Annotated[str, Field(pattern=NICKNAME_PATTERN)]
Password = Annotated[
    str,
    Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH),
    AfterValidator(_check_password),
]


class UserResponse(BaseModel):
    """Public view of a player account."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id_: UUID = Field(alias="id")
    nickname: str
    icon: AvatarIcon
    created_at: datetime
    updated_at: datetime


class AuthTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRegisterRequest(BaseModel):
    """Sign-up form: nickname, password and the avatar shown at the tables."""

    nickname: Nickname
    password: Password
    icon: AvatarIcon = AvatarIcon.GAMBLER


class UserLoginRequest(BaseModel):
    nickname: Nickname
    password: Password


class UserSessionResponse(BaseModel):
    """Account plus a fresh bearer token, returned by register and login."""

    user: UserResponse
    token: AuthTokenResponse


__all__ = [
    "AuthTokenResponse",
    "UserLoginRequest",
    "UserRegisterRequest",
    "UserResponse",
    "UserSessionResponse",
]
