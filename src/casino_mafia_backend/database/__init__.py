"""Database connectivity helpers, schemas and repositories."""

from casino_mafia_backend.database.base import BaseSchema
from casino_mafia_backend.database.dependencies import (
    DatabaseDep,
    SessionDep,
    get_database,
    get_session,
)
from casino_mafia_backend.database.repositories import (
    GameStateRepository,
    SqlGameStateStore,
    UserRepository,
)
from casino_mafia_backend.database.schemas import GameStateSchema, UserSchema
from casino_mafia_backend.database.service import DatabaseService

__all__ = [
    "BaseSchema",
    "DatabaseDep",
    "DatabaseService",
    "GameStateRepository",
    "GameStateSchema",
    "SessionDep",
    "SqlGameStateStore",
    "UserRepository",
    "UserSchema",
    "get_database",
    "get_session",
]
