"""Batch simulations that compare observed and theoretical casino returns."""

from __future__ import annotations

import logging
import time

from pydantic import BaseModel, Field, computed_field
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.casino.aviator import AviatorGame
from casino_mafia_backend.game_logic.casino.blackjack import BlackjackTable
from casino_mafia_backend.game_logic.casino.coin_flip import CoinFlip
from casino_mafia_backend.game_logic.casino.horse_race import HorseRace
from casino_mafia_backend.game_logic.casino.roulette import (
    RouletteBetType,
    RouletteWheel,
)
from casino_mafia_backend.game_logic.casino.slots import SlotMachine
from casino_mafia_backend.game_logic.configuration import (
    OddsConfiguration,
    get_default_odds,
)
from casino_mafia_backend.shared.enums import CasinoGame
from casino_mafia_backend.shared.rng import CasinoRandomService

logger = logging.getLogger(__name__)

DEFAULT_SEED = 42
DEFAULT_ROUNDS = 10_000


class SimulationResult(BaseModel):
    """Outcome of simulating a single game."""

    model_config = ConfigDict(frozen=True)

    game: CasinoGame
    label: str
    rounds: int = Field(..., ge=0)
    observed_rtp: float
    theoretical_rtp: float
    tolerance: float = Field(..., gt=0)
    elapsed_ms: float = Field(default=0.0, ge=0)
    details: dict[str, float | str] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rtp_difference(self) -> float:
        return abs(self.observed_rtp - self.theoretical_rtp)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def within_tolerance(self) -> bool:
        return self.rtp_difference < self.tolerance

    @property
    def observed_house_edge(self) -> float:
        return 1 - self.observed_rtp

    @property
    def theoretical_house_edge(self) -> float:
        return 1 - self.theoretical_rtp

    def summary(self) -> str:
        status = "✓ Within tolerance" if self.within_tolerance else "✗ Outside tolerance"
        return "\n".join(
            (
                f"{self.label} Simulation Results",
                f"Simulations: {self.rounds}",
                f"Observed RTP: {self.observed_rtp * 100:.2f}%",
                f"Theoretical RTP: {self.theoretical_rtp * 100:.2f}%",
                f"Difference: {self.rtp_difference * 100:.2f}%",
                f"House Edge: {self.observed_house_edge * 100:.2f}%",
                f"Status: {status}",
                f"Time: {self.elapsed_ms:.0f}ms",
            )
        )


class CasinoSimulationService:
    """Replay many rounds of every game from one seeded RNG."""

    def __init__(
        self,
        seed: int | None = DEFAULT_SEED,
        *,
        odds: OddsConfiguration | None = None,
    ) -> None:
        self._rng = CasinoRandomService(seed)
        self._odds = odds or get_default_odds()

    @property
    def seed(self) -> int | None:
        return self._rng.seed

    def _result(
        self,
        game: CasinoGame,
        label: str,
        rounds: int,
        observed: float,
        theoretical: float,
        started: float,
        details: dict[str, float | str] | None = None,
    ) -> SimulationResult:
        result = SimulationResult(
            game=game,
            label=label,
            rounds=rounds,
            observed_rtp=observed,
            theoretical_rtp=theoretical,
            tolerance=self._odds.simulation_tolerance,
            elapsed_ms=(time.perf_counter() - started) * 1000,
            details=details or {},
        )
        logger.debug(
            "Simulated %s over %s rounds: observed %.4f, theoretical %.4f.",
            label,
            rounds,
            observed,
            theoretical,
        )
        return result

    def simulate_roulette(
        self,
        rounds: int = DEFAULT_ROUNDS,
        bet_type: RouletteBetType = RouletteBetType.RED,
    ) -> SimulationResult:
        started = time.perf_counter()
        wheel = RouletteWheel(self._rng)
        number = 17 if bet_type is RouletteBetType.SINGLE else None
        observed = wheel.simulate_rtp(bet_type, rounds, number=number)
        return self._result(
            CasinoGame.ROULETTE,
            f"Roulette ({bet_type.value})",
            rounds,
            observed,
            wheel.theoretical_rtp(bet_type),
            started,
            {"bet_type": bet_type.value},
        )

    def simulate_blackjack(self, rounds: int = DEFAULT_ROUNDS) -> SimulationResult:
        started = time.perf_counter()
        table = BlackjackTable(self._rng, odds=self._odds)
        observed = table.simulate_rtp(rounds)
        return self._result(
            CasinoGame.BLACKJACK,
            "Blackjack",
            rounds,
            observed,
            table.theoretical_rtp(),
            started,
        )

    def simulate_slots(self, rounds: int = DEFAULT_ROUNDS) -> SimulationResult:
        started = time.perf_counter()
        machine = SlotMachine(self._rng, odds=self._odds)
        observed = machine.simulate_rtp(rounds)
        return self._result(
            CasinoGame.SLOT_MACHINE,
            "Slot Machine",
            rounds,
            observed,
            machine.theoretical_rtp(),
            started,
            {"target_rtp": machine.target_rtp},
        )

    def simulate_coin_flip(self, rounds: int = DEFAULT_ROUNDS) -> SimulationResult:
        started = time.perf_counter()
        coin = CoinFlip(self._rng, odds=self._odds)
        observed = coin.simulate_rtp(rounds)
        return self._result(
            CasinoGame.COIN_FLIP,
            "Coin Flip",
            rounds,
            observed,
            coin.theoretical_rtp(),
            started,
        )

    def simulate_horse_race(self, rounds: int = DEFAULT_ROUNDS) -> SimulationResult:
        started = time.perf_counter()
        race = HorseRace(self._rng, odds=self._odds)
        observed = race.simulate_rtp(rounds)
        return self._result(
            CasinoGame.HORSE_RACE,
            "Horse Race",
            rounds,
            observed,
            race.theoretical_rtp(),
            started,
        )

    def simulate_aviator(
        self, rounds: int = DEFAULT_ROUNDS, target: float = 2.0
    ) -> SimulationResult:
        started = time.perf_counter()
        game = AviatorGame(self._rng, odds=self._odds)
        observed = game.simulate_rtp(rounds, target)
        return self._result(
            CasinoGame.AVIATOR,
            f"Aviator ({target}x)",
            rounds,
            observed,
            game.theoretical_rtp(),
            started,
            {"target_cashout": target},
        )

    def run_all(self, rounds: int = DEFAULT_ROUNDS) -> tuple[SimulationResult, ...]:
        """Simulate every game in a fixed order."""
        logger.info("Running casino RTP simulation with %s rounds per game.", rounds)
        return (
            self.simulate_roulette(rounds),
            self.simulate_blackjack(rounds),
            self.simulate_slots(rounds),
            self.simulate_coin_flip(rounds),
            self.simulate_horse_race(rounds),
            self.simulate_aviator(rounds),
        )

    @staticmethod
    def format_report(results: tuple[SimulationResult, ...], rounds: int) -> str:
        border = "═" * 43
        lines = [
            f"╔{border}╗",
            "║     CASINO RTP SIMULATION REPORT          ║",
            f"╠{border}╣",
            f"║ Simulations per game: {rounds}",
            f"╠{border}╣",
        ]
        for result in results:
            status = "✓" if result.within_tolerance else "✗"
            lines.append(
                f"║ {status} {result.label:<20} "
                f"RTP: {result.observed_rtp * 100:.1f}% "
                f"({result.theoretical_rtp * 100:.1f}%)"
            )
        lines.append(f"╚{border}╝")
        return "\n".join(lines)

    def generate_report(self, rounds: int = DEFAULT_ROUNDS) -> str:
        return self.format_report(self.run_all(rounds), rounds)


__all__ = [
    "DEFAULT_ROUNDS",
    "DEFAULT_SEED",
    "CasinoSimulationService",
    "SimulationResult",
]
