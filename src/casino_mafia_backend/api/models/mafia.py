"""Pydantic models for mafia endpoints."""

# ruff: noqa: TC001

from __future__ import annotations

from pydantic import BaseModel

from casino_mafia_backend.game_logic import GameState, MafiaEncounter, MafiaEventResult


class MafiaStatusResponse(BaseModel):
    is_active: bool
    min_tribute: int
    max_tribute: int
    cooldown_remaining_ms: int
    encounter: MafiaEncounter | None = None


class MafiaEncounterResponse(BaseModel):
    """Result of a trigger roll; ``encounter`` is empty when nothing happened."""

    encounter: MafiaEncounter | None = None


class MafiaResolutionResponse(BaseModel):
    result: MafiaEventResult
    state: GameState


__all__ = [
    "MafiaEncounterResponse",
    "MafiaResolutionResponse",
    "MafiaStatusResponse",
]
