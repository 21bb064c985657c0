"""Casino floor endpoints.

One-shot games settle within the request. Blackjack hands and aviator
flights are server-side rounds addressed by their ``round_id``.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from casino_mafia_backend.api.dependencies import GameServiceDep, PlayerId
from casino_mafia_backend.api.errors import game_errors
from casino_mafia_backend.api.models import (
    AviatorFlightResponse,
    AviatorStartRequest,
    BlackjackRoundResponse,
    CasinoInfoResponse,
    CoinFlipRequest,
    CoinFlipResponse,
    HorseOdds,
    HorseRaceRequest,
    HorseRaceResponse,
    RouletteBetRequest,
    RouletteResponse,
    SimulationResponse,
    SlotSpinResponse,
    StakeRequest,
)
from casino_mafia_backend.api.services import GameService
from casino_mafia_backend.game_logic.casino import (
    HORSES,
    PAYTABLE,
    AviatorFlight,
    CoinFlip,
    HorseRace,
)
from casino_mafia_backend.game_logic.casino.simulation import (
    DEFAULT_ROUNDS,
    DEFAULT_SEED,
)

router = APIRouter(prefix="/casino", tags=["casino"])

_MAX_SIMULATION_ROUNDS = 100_000


@router.get("", response_model=CasinoInfoResponse)
def get_casino_info(games: GameServiceDep) -> CasinoInfoResponse:
    """Bet presets, paytables and odds for every game on the floor."""
    race = HorseRace(odds=games.odds)
    return CasinoInfoResponse(
        bet_presets=list(games.odds.bet_presets),
        coin_flip_payout=CoinFlip(odds=games.odds).payout_multiplier,
        paytable=list(PAYTABLE),
        horses=[HorseOdds.from_race(race, horse.index) for horse in HORSES],
    )


@router.post("/roulette", response_model=RouletteResponse)
def play_roulette(
    payload: RouletteBetRequest, player_id: PlayerId, games: GameServiceDep
) -> RouletteResponse:
    with game_errors():
        result = games.play_roulette(
            player_id, payload.bet_type, payload.amount, payload.number
        )
    return RouletteResponse(
        result=result, payout=result.payout, state=games.state(player_id)
    )


@router.post("/coin-flip", response_model=CoinFlipResponse)
def flip_coin(
    payload: CoinFlipRequest, player_id: PlayerId, games: GameServiceDep
) -> CoinFlipResponse:
    with game_errors():
        result = games.flip_coin(player_id, payload.choice, payload.amount)
    return CoinFlipResponse(
        result=result,
        payout=result.payout(payload.amount),
        state=games.state(player_id),
    )


@router.post("/horse-race", response_model=HorseRaceResponse)
def race_horses(
    payload: HorseRaceRequest, player_id: PlayerId, games: GameServiceDep
) -> HorseRaceResponse:
    with game_errors():
        result = games.race_horses(player_id, payload.horse_index, payload.amount)
    return HorseRaceResponse(
        result=result,
        payout=result.payout(payload.amount),
        state=games.state(player_id),
    )


@router.post("/slots", response_model=SlotSpinResponse)
def spin_slots(
    payload: StakeRequest, player_id: PlayerId, games: GameServiceDep
) -> SlotSpinResponse:
    with game_errors():
        result = games.spin_slots(player_id, payload.amount)
    return SlotSpinResponse(
        result=result,
        payout=result.payout(payload.amount),
        state=games.state(player_id),
    )


@router.post("/blackjack", response_model=BlackjackRoundResponse)
def deal_blackjack(
    payload: StakeRequest, player_id: PlayerId, games: GameServiceDep
) -> BlackjackRoundResponse:
    """Deal a new hand; a natural settles immediately."""
    with game_errors():
        round_ = games.blackjack_deal(player_id, payload.amount)
    return BlackjackRoundResponse.from_round(round_, games.state(player_id))


@router.post("/blackjack/{round_id}/hit", response_model=BlackjackRoundResponse)
def hit_blackjack(
    round_id: str, player_id: PlayerId, games: GameServiceDep
) -> BlackjackRoundResponse:
    with game_errors():
        round_ = games.blackjack_hit(player_id, round_id)
    return BlackjackRoundResponse.from_round(round_, games.state(player_id))


@router.post("/blackjack/{round_id}/stand", response_model=BlackjackRoundResponse)
def stand_blackjack(
    round_id: str, player_id: PlayerId, games: GameServiceDep
) -> BlackjackRoundResponse:
    with game_errors():
        round_ = games.blackjack_stand(player_id, round_id)
    return BlackjackRoundResponse.from_round(round_, games.state(player_id))


def _flight_response(
    observed: tuple[AviatorFlight, int], player_id: str, games: GameService
) -> AviatorFlightResponse:
    flight, now_ms = observed
    return AviatorFlightResponse.from_flight(
        flight, games.aviator, now_ms, games.state(player_id)
    )


@router.post("/aviator", response_model=AviatorFlightResponse)
def start_flight(
    payload: AviatorStartRequest, player_id: PlayerId, games: GameServiceDep
) -> AviatorFlightResponse:
    """Take off; the multiplier climbs on the server clock from now."""
    with game_errors():
        observed = games.aviator_start(
            player_id, payload.amount, auto_cashout=payload.auto_cashout
        )
    return _flight_response(observed, player_id, games)


@router.get("/aviator/{round_id}", response_model=AviatorFlightResponse)
def get_flight(
    round_id: str, player_id: PlayerId, games: GameServiceDep
) -> AviatorFlightResponse:
    with game_errors():
        observed = games.aviator_status(player_id, round_id)
    return _flight_response(observed, player_id, games)


@router.post("/aviator/{round_id}/cash-out", response_model=AviatorFlightResponse)
def cash_out_flight(
    round_id: str, player_id: PlayerId, games: GameServiceDep
) -> AviatorFlightResponse:
    with game_errors():
        observed = games.aviator_cash_out(player_id, round_id)
    return _flight_response(observed, player_id, games)


@router.get("/simulation", response_model=SimulationResponse)
def run_simulation(
    games: GameServiceDep,
    rounds: int = Query(default=DEFAULT_ROUNDS, ge=1, le=_MAX_SIMULATION_ROUNDS),
    seed: int | None = Query(default=DEFAULT_SEED),
) -> SimulationResponse:
    """Replay every game from a seeded RNG and compare RTPs."""
    results, report = games.run_simulation(rounds, seed)
    return SimulationResponse(
        rounds=rounds, seed=seed, results=list(results), report=report
    )
