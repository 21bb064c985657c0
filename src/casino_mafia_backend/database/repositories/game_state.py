"""Repository and store adapter for persisted game state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy.orm import Session  # noqa: TC002

from casino_mafia_backend.database.schemas import GameStateSchema
from casino_mafia_backend.game_logic.persistence import STORAGE_KEY
from casino_mafia_backend.game_logic.state import GameState

if TYPE_CHECKING:
    from casino_mafia_backend.database.service import DatabaseService

logger = logging.getLogger(__name__)


class GameStateRepository:
    """Read and upsert the JSON state row of a player."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_payload(self, user_id: UUID) -> dict[str, Any] | None:
        row = self._session.get(GameStateSchema, user_id)
        if row is None or row.storage_key != STORAGE_KEY:
            return None
        return row.payload

    def upsert(self, user_id: UUID, payload: dict[str, Any]) -> GameStateSchema:
        """Replace the stored payload for *user_id*, creating the row if needed."""
        row = self._session.get(GameStateSchema, user_id)
        if row is None:
            row = GameStateSchema(
                user_id=user_id, storage_key=STORAGE_KEY, payload=payload
            )
            self._session.add(row)
        else:
            row.storage_key = STORAGE_KEY
            row.payload = payload
        self._session.flush()
        return row


class SqlGameStateStore:
    """:class:`GameStateStore` backed by the ``game_states`` table.

    Each call runs in its own short transaction, since a player's store
    outlives the request that created it.
    """

    def __init__(self, database: DatabaseService) -> None:
        self._database = database

    def save_state(self, player_id: str, state: GameState) -> None:
        with self._database.session() as session:
            GameStateRepository(session).upsert(UUID(player_id), state.to_json())

    def load_state(self, player_id: str) -> GameState | None:
        """Return the stored state; unreadable payloads fall back to the defaults."""
        with self._database.session() as session:
            payload = GameStateRepository(session).get_payload(UUID(player_id))
        if payload is None:
            return None
        return GameState.from_json_or_default(payload)


__all__ = ["GameStateRepository", "SqlGameStateStore"]
