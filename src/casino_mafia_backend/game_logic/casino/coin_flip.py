"""Fair coin flip whose house edge lives in the payout."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.configuration import (
    OddsConfiguration,
    get_default_odds,
)
from casino_mafia_backend.shared.rng import CasinoRandomService
from casino_mafia_backend.shared.rounding import round_half_up


class CoinSide(StrEnum):
    HEADS = "heads"
    TAILS = "tails"


class CoinFlipResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    side: CoinSide
    choice: CoinSide
    player_wins: bool
    payout_multiplier: float

    def payout(self, stake: int) -> int:
        if not self.player_wins:
            return 0
        return round_half_up(stake * self.payout_multiplier)


class CoinFlip:
    """50/50 flip paying ``2 * (1 - edge)`` on a correct call."""

    def __init__(
        self,
        rng: CasinoRandomService | None = None,
        *,
        odds: OddsConfiguration | None = None,
    ) -> None:
        self._rng = rng or CasinoRandomService()
        self._house_edge = (odds or get_default_odds()).coin_flip_house_edge

    @property
    def payout_multiplier(self) -> float:
        return 2.0 * (1 - self._house_edge)

    @property
    def payout_display(self) -> str:
        return f"{self.payout_multiplier:.2f}x"

    def flip(self) -> CoinSide:
        return CoinSide.HEADS if self._rng.next_bool() else CoinSide.TAILS

    def play(self, choice: CoinSide) -> CoinFlipResult:
        side = self.flip()
        player_wins = side is choice
        return CoinFlipResult(
            side=side,
            choice=choice,
            player_wins=player_wins,
            payout_multiplier=self.payout_multiplier if player_wins else 0.0,
        )

    def calculate_winnings(self, stake: int, result: CoinFlipResult) -> int:
        return result.payout(stake) - stake

    def theoretical_rtp(self) -> float:
        return 0.5 * self.payout_multiplier

    def simulate_rtp(self, flips: int, *, stake: int = 100) -> float:
        total_return = sum(self.play(CoinSide.HEADS).payout(stake) for _ in range(flips))
        return total_return / (stake * flips) if flips else 0.0


__all__ = ["CoinFlip", "CoinFlipResult", "CoinSide"]
