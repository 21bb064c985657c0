"""Market and inventory endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from casino_mafia_backend.api.dependencies import GameServiceDep, PlayerId
from casino_mafia_backend.api.errors import game_errors
from casino_mafia_backend.api.models import (
    InventoryResponse,
    MarketResponse,
    PlayerStateResponse,
    UseItemResponse,
)
from casino_mafia_backend.api.services import GameService

router = APIRouter(tags=["market"])


@router.get("/market", response_model=MarketResponse)
def list_market_items() -> MarketResponse:
    return MarketResponse(items=list(GameService.market_items()))


@router.post("/market/{item_id}/buy", response_model=PlayerStateResponse)
def buy_item(
    item_id: str, player_id: PlayerId, games: GameServiceDep
) -> PlayerStateResponse:
    """Buy one unit of a market item."""
    with game_errors():
        return PlayerStateResponse(state=games.buy_item(player_id, item_id))


@router.get("/inventory", response_model=InventoryResponse)
def list_inventory(player_id: PlayerId, games: GameServiceDep) -> InventoryResponse:
    state = games.state(player_id)
    return InventoryResponse(
        items=list(state.inventory), total_items=state.total_inventory_items
    )


@router.post("/inventory/{item_id}/use", response_model=UseItemResponse)
def use_item(item_id: str, player_id: PlayerId, games: GameServiceDep) -> UseItemResponse:
    """Eat one unit of a held item."""
    with game_errors():
        restored = games.use_item(player_id, item_id)
    return UseItemResponse(
        item_id=item_id, hunger_restored=restored, state=games.state(player_id)
    )
