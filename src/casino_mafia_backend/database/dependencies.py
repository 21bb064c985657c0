"""Database wiring shared by the request dependencies and the game service."""

from collections.abc import Iterator
from functools import cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from casino_mafia_backend.database.repositories.game_state import SqlGameStateStore
from casino_mafia_backend.database.service import DatabaseService
from casino_mafia_backend.settings import BackendSettings, get_settings

SettingsDep = Annotated[BackendSettings, Depends(get_settings)]


@cache
def build_database_service(database_url: str) -> DatabaseService:
    """Return the process-wide engine wrapper for *database_url*."""
    return DatabaseService(database_url)


@cache
def build_game_state_store(database_url: str) -> SqlGameStateStore:
    """Return the store that persists player snapshots in *database_url*."""
    return SqlGameStateStore(build_database_service(database_url))


def get_database(settings: SettingsDep) -> DatabaseService:
    return build_database_service(settings.database_url)


DatabaseDep = Annotated[DatabaseService, Depends(get_database)]


def get_session(db: DatabaseDep) -> Iterator[Session]:
    """Open one unit of work per request; it commits when the handler returns."""
    with db.session() as session:
        yield session


SessionDep = Annotated[Session, Depends(get_session)]
