"""Persisted player game state."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from casino_mafia_backend.database.base import BaseSchema
from casino_mafia_backend.game_logic.persistence import STORAGE_KEY


class GameStateSchema(BaseSchema):
    """One serialized :class:`GameState` per player, stored as camelCase JSON."""

    __tablename__ = "game_states"

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    storage_key: Mapped[str] = mapped_column(
        String(64), nullable=False, default=STORAGE_KEY
    )
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
