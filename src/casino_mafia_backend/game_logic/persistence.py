"""Persistence abstractions for player game state.

The game logic layer only depends on the :class:`GameStateStore` protocol.
The API layer picks a concrete adapter: the in-memory store for tests and
local play, or the SQLAlchemy-backed store from the database package.
"""

from __future__ import annotations

from typing import Protocol

from casino_mafia_backend.game_logic.state import GameState  # noqa: TC001

STORAGE_KEY = "casino_mafia_game_state"


class GameStateStore(Protocol):
    """Protocol describing how game state snapshots are persisted."""

    def save_state(self, player_id: str, state: GameState) -> None:
        """Persist *state* for *player_id*, replacing any previous value."""

    def load_state(self, player_id: str) -> GameState | None:
        """Return the latest stored state for *player_id* or ``None``."""


class InMemoryGameStateStore:
    """Trivial in-memory implementation of :class:`GameStateStore`."""

    def __init__(self) -> None:
        self._states: dict[str, GameState] = {}

    def save_state(self, player_id: str, state: GameState) -> None:
        """Store *state* keyed by *player_id*."""
        self._states[player_id] = state

    def load_state(self, player_id: str) -> GameState | None:
        """Return the stored state for *player_id* if available."""
        return self._states.get(player_id)


__all__ = ["STORAGE_KEY", "GameStateStore", "InMemoryGameStateStore"]
