"""Weighted horse race with house-edge adjusted fixed odds."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.configuration import (
    OddsConfiguration,
    get_default_odds,
)
from casino_mafia_backend.shared.rng import CasinoRandomService
from casino_mafia_backend.shared.rounding import round_half_up

_TRAILING_MIN = 0.6
_TRAILING_SPREAD = 0.39


class Horse(BaseModel):
    """Runner whose weight sets its share of the win probability."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    name: str
    weight: int = Field(..., gt=0)
    color: str

    def win_probability(self, total_weight: int) -> float:
        return self.weight / total_weight

    def payout_multiplier(self, total_weight: int, house_edge: float) -> float:
        """Return fair odds ``1 / p`` shaved by the house edge."""
        return (1 / self.win_probability(total_weight)) * (1 - house_edge)


HORSES: tuple[Horse, ...] = (
    Horse(index=0, name="Thunder", weight=25, color="#E53935"),
    Horse(index=1, name="Lightning", weight=22, color="#1E88E5"),
    Horse(index=2, name="Storm", weight=20, color="#43A047"),
    Horse(index=3, name="Blaze", weight=18, color="#FF9800"),
    Horse(index=4, name="Shadow", weight=15, color="#8E24AA"),
)


class HorseRaceResult(BaseModel):
    """Race winner and the finishing line-up used for replaying the race."""

    model_config = ConfigDict(frozen=True)

    winner_index: int
    selected_index: int | None
    player_wins: bool
    payout_multiplier: float
    final_positions: tuple[float, ...]

    def payout(self, stake: int) -> int:
        if not self.player_wins:
            return 0
        return round_half_up(stake * self.payout_multiplier)


class HorseRace:
    """Run races between the configured horses."""

    def __init__(
        self,
        rng: CasinoRandomService | None = None,
        *,
        odds: OddsConfiguration | None = None,
        horses: tuple[Horse, ...] = HORSES,
    ) -> None:
        self._rng = rng or CasinoRandomService()
        self._house_edge = (odds or get_default_odds()).horse_race_house_edge
        self.horses = horses
        self.total_weight = sum(horse.weight for horse in horses)

    @property
    def house_edge(self) -> float:
        return self._house_edge

    def get_horse(self, index: int) -> Horse:
        return self.horses[index]

    def payout_multiplier(self, index: int) -> float:
        return self.horses[index].payout_multiplier(self.total_weight, self._house_edge)

    def win_probability(self, index: int) -> float:
        return self.horses[index].win_probability(self.total_weight)

    def odds_display(self, index: int) -> str:
        return f"{self.payout_multiplier(index):.1f}x"

    def race(self, selected_index: int | None) -> HorseRaceResult:
        """Pick a weighted winner; the rest finish somewhere behind it."""
        weights = {horse.index: float(horse.weight) for horse in self.horses}
        winner_index = self._rng.select_weighted(weights)
        positions = tuple(
            1.0
            if horse.index == winner_index
            else _TRAILING_MIN + self._rng.next_double() * _TRAILING_SPREAD
            for horse in self.horses
        )
        player_wins = selected_index == winner_index
        return HorseRaceResult(
            winner_index=winner_index,
            selected_index=selected_index,
            player_wins=player_wins,
            payout_multiplier=(
                self.payout_multiplier(winner_index) if player_wins else 0.0
            ),
            final_positions=positions,
        )

    def calculate_winnings(self, stake: int, result: HorseRaceResult) -> int:
        return result.payout(stake) - stake

    def theoretical_rtp(self) -> float:
        """Every horse returns ``1 - edge`` since payout offsets probability."""
        return 1 - self._house_edge

    def simulate_rtp(self, races: int, *, stake: int = 100) -> float:
        """Back the favourite for *races* runs and return the observed RTP."""
        total_return = sum(self.race(0).payout(stake) for _ in range(races))
        return total_return / (stake * races) if races else 0.0


__all__ = ["HORSES", "Horse", "HorseRace", "HorseRaceResult"]
