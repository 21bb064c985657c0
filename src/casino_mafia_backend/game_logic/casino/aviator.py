"""Aviator crash game timed by the server clock.

A flight fixes its crash point when it starts. The multiplier then grows as
``e^(rate * seconds)`` from the recorded start time, so the server alone
decides the multiplier a cash-out is worth. Cashing out at or beyond the
crash point loses the stake.
"""

from __future__ import annotations

import math
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.configuration import (
    OddsConfiguration,
    get_default_odds,
)
from casino_mafia_backend.game_logic.errors import RoundStateError
from casino_mafia_backend.shared.rng import CasinoRandomService
from casino_mafia_backend.shared.rounding import round_half_up


class FlightStatus(StrEnum):
    FLYING = "flying"
    CASHED_OUT = "cashed_out"
    CRASHED = "crashed"


class AviatorFlight(BaseModel):
    """Snapshot of a single flight."""

    model_config = ConfigDict(frozen=True)

    round_id: str = Field(default_factory=lambda: uuid4().hex)
    stake: int = Field(..., ge=0)
    crash_point: float = Field(..., ge=1.0)
    started_at_ms: int
    auto_cashout: float | None = Field(default=None, gt=1.0)
    status: FlightStatus = FlightStatus.FLYING
    cashout_multiplier: float | None = None
    settled_at_ms: int | None = None

    @property
    def is_flying(self) -> bool:
        return self.status is FlightStatus.FLYING

    @property
    def won(self) -> bool:
        return self.status is FlightStatus.CASHED_OUT

    @property
    def payout(self) -> int:
        if not self.won or self.cashout_multiplier is None:
            return 0
        return round_half_up(self.stake * self.cashout_multiplier)


class AviatorGame:
    """Start flights and settle cash-outs against their hidden crash point."""

    def __init__(
        self,
        rng: CasinoRandomService | None = None,
        *,
        odds: OddsConfiguration | None = None,
    ) -> None:
        self._rng = rng or CasinoRandomService()
        odds = odds or get_default_odds()
        self._house_edge = odds.aviator_house_edge
        self._growth_rate = odds.aviator_growth_rate
        self._max_display = odds.aviator_max_display_multiplier

    @property
    def house_edge(self) -> float:
        return self._house_edge

    def multiplier_after(self, elapsed_ms: int) -> float:
        seconds = max(elapsed_ms, 0) / 1000
        return math.exp(self._growth_rate * seconds)

    def seconds_to_reach(self, multiplier: float) -> float:
        """Return how long the plane needs to climb to *multiplier*."""
        if multiplier <= 1.0:
            return 0.0
        return math.log(multiplier) / self._growth_rate

    def display_multiplier(self, multiplier: float) -> float:
        return min(multiplier, self._max_display)

    def start(
        self, stake: int, now_ms: int, *, auto_cashout: float | None = None
    ) -> AviatorFlight:
        return AviatorFlight(
            stake=stake,
            crash_point=self._rng.generate_crash_point(self._house_edge),
            started_at_ms=now_ms,
            auto_cashout=auto_cashout,
        )

    def current_multiplier(self, flight: AviatorFlight, now_ms: int) -> float:
        """Return the live multiplier, frozen at the crash point once reached."""
        if flight.cashout_multiplier is not None:
            return flight.cashout_multiplier
        multiplier = self.multiplier_after(now_ms - flight.started_at_ms)
        return min(multiplier, flight.crash_point)

    def advance(self, flight: AviatorFlight, now_ms: int) -> AviatorFlight:
        """Settle *flight* if it crashed or hit its auto cash-out by *now_ms*."""
        if not flight.is_flying:
            return flight
        multiplier = self.multiplier_after(now_ms - flight.started_at_ms)
        target = flight.auto_cashout
        if target is not None and target < flight.crash_point and multiplier >= target:
            return self._cash_out_at(flight, target, now_ms)
        if multiplier >= flight.crash_point:
            return flight.model_copy(
                update={"status": FlightStatus.CRASHED, "settled_at_ms": now_ms}
            )
        return flight

    def cash_out(self, flight: AviatorFlight, now_ms: int) -> AviatorFlight:
        """Take the money at the server-computed multiplier if still airborne."""
        if not flight.is_flying:
            msg = "This flight has already landed."
            raise RoundStateError(msg)
        flight = self.advance(flight, now_ms)
        if not flight.is_flying:
            return flight
        multiplier = self.multiplier_after(now_ms - flight.started_at_ms)
        return self._cash_out_at(flight, multiplier, now_ms)

    @staticmethod
    def _cash_out_at(
        flight: AviatorFlight, multiplier: float, now_ms: int
    ) -> AviatorFlight:
        return flight.model_copy(
            update={
                "status": FlightStatus.CASHED_OUT,
                "cashout_multiplier": multiplier,
                "settled_at_ms": now_ms,
            }
        )

    def probability_of_reaching(self, multiplier: float) -> float:
        if multiplier < 1.0:
            return 1.0
        return (1 - self._house_edge) / multiplier

    def expected_multiplier_at(self, survival_probability: float) -> float:
        """Return the multiplier reached with *survival_probability*."""
        return (1 - self._house_edge) / survival_probability

    def theoretical_rtp(self) -> float:
        """Return ``1 - edge``; the cash-out target does not matter."""
        return 1 - self._house_edge

    def simulate_rtp(self, rounds: int, target: float, *, stake: int = 100) -> float:
        """Auto cash out at *target* for *rounds* flights; return observed RTP."""
        win = round_half_up(stake * target)
        total_return = sum(
            win
            for _ in range(rounds)
            if self._rng.generate_crash_point(self._house_edge) >= target
        )
        return total_return / (stake * rounds) if rounds else 0.0


__all__ = ["AviatorFlight", "AviatorGame", "FlightStatus"]
