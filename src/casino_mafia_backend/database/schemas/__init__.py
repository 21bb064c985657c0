"""SQLAlchemy table definitions."""

from casino_mafia_backend.database.schemas.game_state import GameStateSchema
from casino_mafia_backend.database.schemas.user import UserSchema

__all__ = ["GameStateSchema", "UserSchema"]
