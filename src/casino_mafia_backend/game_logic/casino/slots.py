"""Three-reel slot machine driven by a weighted paytable."""

from __future__ import annotations

from enum import StrEnum
from itertools import product

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.configuration import (
    OddsConfiguration,
    get_default_odds,
)
from casino_mafia_backend.shared.rng import CasinoRandomService

REEL_COUNT = 3


class SlotSymbol(StrEnum):
    SEVEN = "seven"
    BAR = "bar"
    BELL = "bell"
    CHERRY = "cherry"
    LEMON = "lemon"
    ORANGE = "orange"
    BLANK = "blank"


class PaytableEntry(BaseModel):
    """Reel weight and multipliers for one symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: SlotSymbol
    emoji: str
    weight: int = Field(..., gt=0)
    three_match: int = Field(..., ge=0)
    two_match: int = Field(default=0, ge=0)


PAYTABLE: tuple[PaytableEntry, ...] = (
    PaytableEntry(symbol=SlotSymbol.SEVEN, emoji="7️⃣", weight=3, three_match=100, two_match=5),
    PaytableEntry(symbol=SlotSymbol.BAR, emoji="🎱", weight=5, three_match=50, two_match=2),
    PaytableEntry(symbol=SlotSymbol.BELL, emoji="🔔", weight=8, three_match=20),
    PaytableEntry(symbol=SlotSymbol.CHERRY, emoji="🍒", weight=12, three_match=10, two_match=2),
    PaytableEntry(symbol=SlotSymbol.LEMON, emoji="🍋", weight=15, three_match=5),
    PaytableEntry(symbol=SlotSymbol.ORANGE, emoji="🍊", weight=18, three_match=3),
    PaytableEntry(symbol=SlotSymbol.BLANK, emoji="⬜", weight=39, three_match=0),
)  # fmt: skip


class SlotResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    reels: tuple[SlotSymbol, SlotSymbol, SlotSymbol]
    payout_multiplier: int = Field(..., ge=0)
    is_jackpot: bool = False
    win_type: str | None = None

    @property
    def is_win(self) -> bool:
        return self.payout_multiplier > 0

    def payout(self, stake: int) -> int:
        return stake * self.payout_multiplier


class SlotMachine:
    """Spin three independent reels and score them against the paytable."""

    def __init__(
        self,
        rng: CasinoRandomService | None = None,
        *,
        odds: OddsConfiguration | None = None,
        paytable: tuple[PaytableEntry, ...] = PAYTABLE,
    ) -> None:
        self._rng = rng or CasinoRandomService()
        self._target_rtp = (odds or get_default_odds()).slot_target_rtp
        self._paytable = {entry.symbol: entry for entry in paytable}
        self._weights = {entry.symbol: float(entry.weight) for entry in paytable}

    @property
    def target_rtp(self) -> float:
        return self._target_rtp

    @property
    def display_symbols(self) -> tuple[PaytableEntry, ...]:
        return tuple(
            entry for entry in self._paytable.values() if entry.symbol is not SlotSymbol.BLANK
        )

    def entry(self, symbol: SlotSymbol) -> PaytableEntry:
        return self._paytable[symbol]

    def spin(self) -> SlotResult:
        first, second, third = (
            self._rng.select_weighted(self._weights) for _ in range(REEL_COUNT)
        )
        return self.evaluate((first, second, third))

    def evaluate(self, reels: tuple[SlotSymbol, SlotSymbol, SlotSymbol]) -> SlotResult:
        """Score *reels*: three of a kind, then a leading pair, then cherries."""
        first, second, third = reels
        if first == second == third and first is not SlotSymbol.BLANK:
            entry = self._paytable[first]
            return SlotResult(
                reels=reels,
                payout_multiplier=entry.three_match,
                is_jackpot=first is SlotSymbol.SEVEN,
                win_type=f"3x {entry.emoji}" if entry.three_match > 0 else None,
            )
        if first == second and first is not SlotSymbol.BLANK:
            entry = self._paytable[first]
            if entry.two_match > 0:
                return SlotResult(
                    reels=reels,
                    payout_multiplier=entry.two_match,
                    win_type=f"2x {entry.emoji}",
                )
        cherries = reels.count(SlotSymbol.CHERRY)
        if 1 <= cherries < REEL_COUNT:
            return SlotResult(
                reels=reels, payout_multiplier=cherries, win_type=f"{cherries}🍒"
            )
        return SlotResult(reels=reels, payout_multiplier=0)

    def calculate_winnings(self, stake: int, result: SlotResult) -> int:
        return result.payout(stake) - stake

    def theoretical_rtp(self) -> float:
        """Enumerate every reel combination and weight its multiplier."""
        total = sum(self._weights.values())
        expected = 0.0
        for reels in product(self._paytable, repeat=REEL_COUNT):
            probability = 1.0
            for symbol in reels:
                probability *= self._weights[symbol] / total
            expected += probability * self.evaluate(reels).payout_multiplier
        return expected

    def simulate_rtp(self, spins: int, *, stake: int = 100) -> float:
        total_return = sum(self.spin().payout(stake) for _ in range(spins))
        return total_return / (stake * spins) if spins else 0.0


__all__ = ["PAYTABLE", "PaytableEntry", "SlotMachine", "SlotResult", "SlotSymbol"]
