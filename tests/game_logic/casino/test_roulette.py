"""Tests for European roulette."""

import pytest
from pydantic import ValidationError

from casino_mafia_backend.game_logic.casino import (
    RouletteBet,
    RouletteBetType,
    RouletteResult,
    RouletteWheel,
)
from casino_mafia_backend.game_logic.casino.roulette import (
    POCKETS,
    WHEEL_ORDER,
    payout_multiplier,
    pocket_color,
)
from casino_mafia_backend.shared import CasinoRandomService


class FixedPocket(CasinoRandomService):
    def __init__(self, pocket: int) -> None:
        super().__init__(0)
        self.pocket = pocket

    def next_int(self, upper: int) -> int:
        return self.pocket


def test_wheel_holds_every_pocket_once() -> None:
    assert sorted(WHEEL_ORDER) == list(range(POCKETS))
    assert pocket_color(0) == "green"
    assert pocket_color(1) == "red"
    assert pocket_color(2) == "black"


def test_pocket_properties() -> None:
    zero = RouletteResult.for_pocket(0)
    assert (zero.dozen, zero.column, zero.is_odd, zero.is_low) == (0, 0, False, False)

    result = RouletteResult.for_pocket(14)
    assert result.color == "red"
    assert result.dozen == 2
    assert result.column == 2
    assert result.is_low
    assert not result.is_odd


@pytest.mark.parametrize(
    ("bet_type", "multiplier"),
    [
        (RouletteBetType.SINGLE, 35),
        (RouletteBetType.GREEN, 35),
        (RouletteBetType.RED, 1),
        (RouletteBetType.HIGH, 1),
        (RouletteBetType.DOZEN3, 2),
        (RouletteBetType.COLUMN1, 2),
    ],
)
def test_payout_multipliers(bet_type: RouletteBetType, multiplier: int) -> None:
    assert payout_multiplier(bet_type) == multiplier


def test_single_bets_need_exactly_one_number() -> None:
    with pytest.raises(ValidationError):
        RouletteBet(bet_type=RouletteBetType.SINGLE, amount=10)
    with pytest.raises(ValidationError):
        RouletteBet(bet_type=RouletteBetType.RED, number=3, amount=10)
    with pytest.raises(ValidationError):
        RouletteBet(bet_type=RouletteBetType.SINGLE, number=37, amount=10)


@pytest.mark.parametrize(
    ("pocket", "bet_type", "wins"),
    [
        (0, RouletteBetType.GREEN, True),
        (0, RouletteBetType.EVEN, False),
        (0, RouletteBetType.LOW, False),
        (0, RouletteBetType.DOZEN1, False),
        (36, RouletteBetType.RED, True),
        (36, RouletteBetType.HIGH, True),
        (36, RouletteBetType.COLUMN3, True),
        (13, RouletteBetType.DOZEN2, True),
        (13, RouletteBetType.BLACK, True),
        (13, RouletteBetType.ODD, True),
    ],
)
def test_check_win(pocket: int, bet_type: RouletteBetType, wins: bool) -> None:
    bet = RouletteBet(bet_type=bet_type, amount=10)

    assert RouletteWheel.check_win(bet, RouletteResult.for_pocket(pocket)) is wins


def test_spin_pays_stake_plus_winnings() -> None:
    wheel = RouletteWheel(FixedPocket(17))
    straight = RouletteBet(bet_type=RouletteBetType.SINGLE, number=17, amount=10)
    dozen = RouletteBet(bet_type=RouletteBetType.DOZEN1, amount=10)

    assert wheel.spin(straight).payout == 360
    assert wheel.spin(dozen).payout == 0
    assert wheel.calculate_winnings(dozen, wheel.spin()) == -10
    assert wheel.spin().payout == 0


@pytest.mark.parametrize("bet_type", list(RouletteBetType))
def test_every_bet_returns_36_in_37(bet_type: RouletteBetType) -> None:
    assert RouletteWheel.theoretical_rtp(bet_type) == pytest.approx(36 / 37)


def test_simulated_rtp_is_close_to_theory() -> None:
    wheel = RouletteWheel(CasinoRandomService(5))

    assert wheel.simulate_rtp(RouletteBetType.RED, 20_000) == pytest.approx(
        36 / 37, abs=0.03
    )
