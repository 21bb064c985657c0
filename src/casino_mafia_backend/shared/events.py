"""Activity journal primitives shared across the backend."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ActivityEvent(BaseModel):
    """Represents a single immutable entry describing a player-facing outcome."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., min_length=1)
    message: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))


class ActivityLog(BaseModel):
    """Bounded, append-only journal of recent activity for one player."""

    model_config = ConfigDict(frozen=True)

    capacity: int = Field(default=50, ge=1)
    events: tuple[ActivityEvent, ...] = Field(default_factory=tuple)

    def append(self, event: ActivityEvent) -> ActivityLog:
        """Return a new :class:`ActivityLog` with *event* appended.

        The oldest entries are dropped once the log exceeds its capacity.
        """
        events = (*self.events, event)[-self.capacity :]
        return ActivityLog(capacity=self.capacity, events=events)

    def latest(self, count: int = 10) -> tuple[ActivityEvent, ...]:
        """Return up to *count* most recent events, newest last."""
        if count <= 0:
            return ()
        return self.events[-count:]


__all__ = ["ActivityEvent", "ActivityLog"]
