"""Service layer for API-specific business logic."""

from casino_mafia_backend.api.services.auth import (
    AuthService,
    InvalidCredentialsError,
    TokenPayload,
    UserAlreadyExistsError,
)
from casino_mafia_backend.api.services.game import GameService, PlayerSession

__all__ = [
    "AuthService",
    "GameService",
    "InvalidCredentialsError",
    "PlayerSession",
    "TokenPayload",
    "UserAlreadyExistsError",
]
