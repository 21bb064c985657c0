"""Dependency providers for FastAPI routers."""

from __future__ import annotations

import logging
from functools import cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError

from casino_mafia_backend.api.services import AuthService, GameService
from casino_mafia_backend.database import SessionDep, UserRepository, UserSchema
from casino_mafia_backend.database.dependencies import build_game_state_store
from casino_mafia_backend.game_logic import get_default_odds, get_default_rules
from casino_mafia_backend.settings import get_settings
from casino_mafia_backend.shared import CasinoRandomService

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)


@cache
def get_auth_service() -> AuthService:
    """Return the shared :class:`AuthService` instance."""
    return AuthService(settings=get_settings())


@cache
def get_game_service() -> GameService:
    """Return the process-wide :class:`GameService` backed by the database."""
    settings = get_settings()
    return GameService(
        build_game_state_store(settings.database_url),
        rng=CasinoRandomService(settings.rng_seed),
        rules=get_default_rules(),
        odds=get_default_odds(),
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_security)],
    session: SessionDep,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserSchema:
    """Resolve the authenticated user from a bearer token."""
    if credentials is None:
        raise _unauthorized("Missing credentials")

    try:
        payload = auth_service.decode_access_token(credentials.credentials)
        user_id = UUID(payload.sub)
    except (PyJWTError, ValueError) as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthorized("Invalid token") from exc

    user = UserRepository(session).get_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_player_id(user: Annotated[UserSchema, Depends(get_current_user)]) -> str:
    """Return the game-store key of the authenticated player."""
    return str(user.id)


PlayerId = Annotated[str, Depends(get_player_id)]
GameServiceDep = Annotated[GameService, Depends(get_game_service)]


__all__ = [
    "GameServiceDep",
    "PlayerId",
    "get_auth_service",
    "get_current_user",
    "get_game_service",
    "get_player_id",
]
