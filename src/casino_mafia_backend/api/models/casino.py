"""Pydantic models for casino floor endpoints."""

# ruff: noqa: TC001

from __future__ import annotations

from pydantic import BaseModel

from casino_mafia_backend.game_logic import GameState
from casino_mafia_backend.game_logic.casino import (
    AviatorFlight,
    AviatorGame,
    BlackjackOutcome,
    BlackjackRound,
    Card,
    CoinFlipResult,
    CoinSide,
    FlightStatus,
    HorseRace,
    HorseRaceResult,
    RouletteBetType,
    RouletteResult,
    SimulationResult,
    SlotResult,
)
from casino_mafia_backend.game_logic.casino.slots import PaytableEntry


class StakeRequest(BaseModel):
    """Bet amount; validity is checked against the wallet when settling."""

    amount: int


class HorseOdds(BaseModel):
    index: int
    name: str
    color: str
    win_probability: float
    payout_multiplier: float
    odds_display: str

    @classmethod
    def from_race(cls, race: HorseRace, index: int) -> HorseOdds:
        horse = race.get_horse(index)
        return cls(
            index=horse.index,
            name=horse.name,
            color=horse.color,
            win_probability=race.win_probability(index),
            payout_multiplier=race.payout_multiplier(index),
            odds_display=race.odds_display(index),
        )


class CasinoInfoResponse(BaseModel):
    bet_presets: list[int]
    coin_flip_payout: float
    paytable: list[PaytableEntry]
    horses: list[HorseOdds]


class RouletteBetRequest(StakeRequest):
    bet_type: RouletteBetType
    number: int | None = None


class RouletteResponse(BaseModel):
    result: RouletteResult
    payout: int
    state: GameState


class CoinFlipRequest(StakeRequest):
    choice: CoinSide


class CoinFlipResponse(BaseModel):
    result: CoinFlipResult
    payout: int
    state: GameState


class HorseRaceRequest(StakeRequest):
    horse_index: int


class HorseRaceResponse(BaseModel):
    result: HorseRaceResult
    payout: int
    state: GameState


class SlotSpinResponse(BaseModel):
    result: SlotResult
    payout: int
    state: GameState


class CardResponse(BaseModel):
    rank: str
    suit: str
    label: str

    @classmethod
    def from_card(cls, card: Card) -> CardResponse:
        return cls(rank=card.rank.value, suit=card.suit.value, label=card.label)


class BlackjackRoundResponse(BaseModel):
    """A blackjack hand as the player may see it.

    While the player is still acting only the dealer's upcard is revealed.
    """

    round_id: str
    stake: int
    status: str
    player_cards: list[CardResponse]
    player_value: int
    player_soft: bool
    dealer_cards: list[CardResponse]
    dealer_value: int
    outcome: BlackjackOutcome | None = None
    payout: int = 0
    state: GameState

    @classmethod
    def from_round(
        cls, round_: BlackjackRound, state: GameState
    ) -> BlackjackRoundResponse:
        if round_.is_settled:
            dealer_cards = round_.dealer.cards
            dealer_value = round_.dealer.value
        else:
            upcard = round_.dealer_upcard
            dealer_cards = (upcard,) if upcard else ()
            dealer_value = upcard.base_value if upcard else 0
        return cls(
            round_id=round_.round_id,
            stake=round_.stake,
            status=round_.status.value,
            player_cards=[CardResponse.from_card(card) for card in round_.player.cards],
            player_value=round_.player.value,
            player_soft=round_.player.is_soft,
            dealer_cards=[CardResponse.from_card(card) for card in dealer_cards],
            dealer_value=dealer_value,
            outcome=round_.result.outcome if round_.result else None,
            payout=round_.result.payout if round_.result else 0,
            state=state,
        )


class AviatorStartRequest(StakeRequest):
    auto_cashout: float | None = None


class AviatorFlightResponse(BaseModel):
    """A flight as seen at ``now_ms``; the crash point stays hidden mid-air."""

    round_id: str
    stake: int
    status: FlightStatus
    started_at_ms: int
    now_ms: int
    multiplier: float
    display_multiplier: float
    auto_cashout: float | None
    crash_point: float | None
    payout: int
    state: GameState

    @classmethod
    def from_flight(
        cls,
        flight: AviatorFlight,
        game: AviatorGame,
        now_ms: int,
        state: GameState,
    ) -> AviatorFlightResponse:
        multiplier = game.current_multiplier(flight, now_ms)
        return cls(
            round_id=flight.round_id,
            stake=flight.stake,
            status=flight.status,
            started_at_ms=flight.started_at_ms,
            now_ms=now_ms,
            multiplier=multiplier,
            display_multiplier=game.display_multiplier(multiplier),
            auto_cashout=flight.auto_cashout,
            crash_point=None if flight.is_flying else flight.crash_point,
            payout=flight.payout,
            state=state,
        )


class SimulationResponse(BaseModel):
    rounds: int
    seed: int | None
    results: list[SimulationResult]
    report: str


__all__ = [
    "AviatorFlightResponse",
    "AviatorStartRequest",
    "BlackjackRoundResponse",
    "CardResponse",
    "CasinoInfoResponse",
    "CoinFlipRequest",
    "CoinFlipResponse",
    "HorseOdds",
    "HorseRaceRequest",
    "HorseRaceResponse",
    "RouletteBetRequest",
    "RouletteResponse",
    "SimulationResponse",
    "SlotSpinResponse",
    "StakeRequest",
]
