"""Mafia extortion endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from casino_mafia_backend.api.dependencies import GameServiceDep, PlayerId
from casino_mafia_backend.api.errors import game_errors
from casino_mafia_backend.api.models import (
    MafiaEncounterResponse,
    MafiaResolutionResponse,
    MafiaStatusResponse,
)

router = APIRouter(prefix="/mafia", tags=["mafia"])


@router.get("", response_model=MafiaStatusResponse)
def get_mafia_status(player_id: PlayerId, games: GameServiceDep) -> MafiaStatusResponse:
    state = games.state(player_id)
    encounter, cooldown_ms = games.mafia_status(player_id)
    return MafiaStatusResponse(
        is_active=state.is_mafia_active,
        min_tribute=state.min_tribute,
        max_tribute=state.max_tribute,
        cooldown_remaining_ms=cooldown_ms,
        encounter=encounter,
    )


@router.post("/check", response_model=MafiaEncounterResponse)
def check_mafia(player_id: PlayerId, games: GameServiceDep) -> MafiaEncounterResponse:
    """Roll for an event; clients call this periodically while playing."""
    return MafiaEncounterResponse(encounter=games.mafia_check(player_id))


@router.post("/force", response_model=MafiaEncounterResponse)
def force_mafia(player_id: PlayerId, games: GameServiceDep) -> MafiaEncounterResponse:
    with game_errors():
        return MafiaEncounterResponse(encounter=games.mafia_force(player_id))


@router.post("/pay", response_model=MafiaResolutionResponse)
def pay_tribute(player_id: PlayerId, games: GameServiceDep) -> MafiaResolutionResponse:
    with game_errors():
        result = games.mafia_pay(player_id)
    return MafiaResolutionResponse(result=result, state=games.state(player_id))


@router.post("/fight", response_model=MafiaResolutionResponse)
def fight_mafia(player_id: PlayerId, games: GameServiceDep) -> MafiaResolutionResponse:
    with game_errors():
        result = games.mafia_fight(player_id)
    return MafiaResolutionResponse(result=result, state=games.state(player_id))


@router.post("/dismiss", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_mafia(player_id: PlayerId, games: GameServiceDep) -> None:
    games.mafia_dismiss(player_id)


@router.post("/cooldown/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset_mafia_cooldown(player_id: PlayerId, games: GameServiceDep) -> None:
    games.mafia_reset_cooldown(player_id)
