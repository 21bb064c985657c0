"""Player state endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from casino_mafia_backend.api.dependencies import GameServiceDep, PlayerId
from casino_mafia_backend.api.models import (
    ActivityResponse,
    PlayerStateResponse,
    PlayerStatsResponse,
)

router = APIRouter(prefix="/player", tags=["player"])


@router.get("/state", response_model=PlayerStateResponse)
def get_state(player_id: PlayerId, games: GameServiceDep) -> PlayerStateResponse:
    return PlayerStateResponse(state=games.state(player_id))


@router.get("/stats", response_model=PlayerStatsResponse)
def get_stats(player_id: PlayerId, games: GameServiceDep) -> PlayerStatsResponse:
    """Derived values such as tribute range, XP progress and job attempts."""
    return PlayerStatsResponse.from_state(
        games.state(player_id), games.suggested_donation(player_id)
    )


@router.get("/activity", response_model=ActivityResponse)
def get_activity(
    player_id: PlayerId,
    games: GameServiceDep,
    count: int = Query(default=10, ge=1, le=50),
) -> ActivityResponse:
    return ActivityResponse(events=list(games.activity(player_id, count)))


@router.post("/reset", response_model=PlayerStateResponse)
def reset_game(player_id: PlayerId, games: GameServiceDep) -> PlayerStateResponse:
    """Start over from the default state."""
    return PlayerStateResponse(state=games.reset(player_id))


@router.post("/penalties/casino-time", response_model=PlayerStateResponse)
def apply_casino_time_penalty(
    player_id: PlayerId, games: GameServiceDep
) -> PlayerStateResponse:
    return PlayerStateResponse(state=games.apply_casino_time_penalty(player_id))


@router.post("/penalties/home-absence", response_model=PlayerStateResponse)
def apply_home_absence_penalty(
    player_id: PlayerId, games: GameServiceDep
) -> PlayerStateResponse:
    return PlayerStateResponse(state=games.apply_home_absence_penalty(player_id))
