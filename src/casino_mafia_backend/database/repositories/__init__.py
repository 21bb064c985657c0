"""Repositories wrapping SQLAlchemy sessions."""

from casino_mafia_backend.database.repositories.game_state import (
    GameStateRepository,
    SqlGameStateStore,
)
from casino_mafia_backend.database.repositories.user import UserRepository

__all__ = ["GameStateRepository", "SqlGameStateStore", "UserRepository"]
