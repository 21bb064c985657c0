"""Home, hospital, secure building and gang headquarters endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from casino_mafia_backend.api.dependencies import GameServiceDep, PlayerId
from casino_mafia_backend.api.errors import game_errors
from casino_mafia_backend.api.models import (
    DonationRequest,
    HomeVisitResponse,
    HospitalResponse,
    PlayerStateResponse,
    RecruitRequest,
    SuggestedDonationResponse,
)

router = APIRouter(prefix="/buildings", tags=["buildings"])


@router.post("/home/visit", response_model=HomeVisitResponse)
def visit_home(player_id: PlayerId, games: GameServiceDep) -> HomeVisitResponse:
    """Collect the home reward and cheer the family up."""
    reward = games.visit_home(player_id)
    return HomeVisitResponse(reward=reward, state=games.state(player_id))


@router.get("/home/donation", response_model=SuggestedDonationResponse)
def get_suggested_donation(
    player_id: PlayerId, games: GameServiceDep
) -> SuggestedDonationResponse:
    return SuggestedDonationResponse(amount=games.suggested_donation(player_id))


@router.post("/home/donation", response_model=PlayerStateResponse)
def leave_money_for_family(
    payload: DonationRequest, player_id: PlayerId, games: GameServiceDep
) -> PlayerStateResponse:
    with game_errors():
        return PlayerStateResponse(state=games.donate(player_id, payload.amount))


@router.post("/hospital/heal", response_model=HospitalResponse)
def heal_at_hospital(player_id: PlayerId, games: GameServiceDep) -> HospitalResponse:
    """Pay for a full heal; each visit raises the next price."""
    with game_errors():
        price = games.visit_hospital(player_id)
    return HospitalResponse(price_paid=price, state=games.state(player_id))


@router.post("/secure/bodyguards", response_model=PlayerStateResponse)
def hire_bodyguard(player_id: PlayerId, games: GameServiceDep) -> PlayerStateResponse:
    with game_errors():
        return PlayerStateResponse(state=games.hire_bodyguard(player_id))


@router.post("/gang/recruits", response_model=PlayerStateResponse)
def recruit_gang_members(
    payload: RecruitRequest, player_id: PlayerId, games: GameServiceDep
) -> PlayerStateResponse:
    with game_errors():
        return PlayerStateResponse(state=games.recruit_gang(player_id, payload.count))
