"""Navigation endpoints backed by the shared route table."""

from __future__ import annotations

from fastapi import APIRouter

from casino_mafia_backend.api.dependencies import GameServiceDep, PlayerId
from casino_mafia_backend.api.errors import game_errors
from casino_mafia_backend.api.models import (
    NavigateRequest,
    NavigateResponse,
    RouteEntry,
    RoutesResponse,
)
from casino_mafia_backend.game_logic import INITIAL_LOCATION

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("", response_model=RoutesResponse)
def list_routes(player_id: PlayerId, games: GameServiceDep) -> RoutesResponse:
    """Every route, flagged with whether the player may open it yet."""
    return RoutesResponse(
        initial_location=INITIAL_LOCATION,
        routes=[
            RouteEntry(route=route, locked=locked)
            for route, locked in games.routes(player_id)
        ],
    )


@router.post("", response_model=NavigateResponse)
def navigate(
    payload: NavigateRequest, player_id: PlayerId, games: GameServiceDep
) -> NavigateResponse:
    with game_errors():
        return NavigateResponse(route=games.navigate(player_id, payload.path))
