"""Tests for the three-reel slot machine."""

import pytest

from casino_mafia_backend.game_logic.casino import PAYTABLE, SlotMachine, SlotSymbol
from casino_mafia_backend.shared import CasinoRandomService

S = SlotSymbol


@pytest.mark.parametrize(
    ("reels", "multiplier", "win_type"),
    [
        ((S.SEVEN, S.SEVEN, S.SEVEN), 100, "3x 7️⃣"),
        ((S.ORANGE, S.ORANGE, S.ORANGE), 3, "3x 🍊"),
        ((S.BAR, S.BAR, S.LEMON), 2, "2x 🎱"),
        ((S.SEVEN, S.SEVEN, S.CHERRY), 5, "2x 7️⃣"),
        ((S.CHERRY, S.CHERRY, S.BELL), 2, "2x 🍒"),
        ((S.BELL, S.BELL, S.CHERRY), 1, "1🍒"),
        ((S.LEMON, S.CHERRY, S.CHERRY), 2, "2🍒"),
        ((S.BLANK, S.BLANK, S.BLANK), 0, None),
        ((S.LEMON, S.LEMON, S.BELL), 0, None),
    ],
)
def test_evaluate(
    reels: tuple[SlotSymbol, SlotSymbol, SlotSymbol],
    multiplier: int,
    win_type: str | None,
) -> None:
    result = SlotMachine().evaluate(reels)

    assert result.payout_multiplier == multiplier
    assert result.win_type == win_type
    assert result.payout(10) == 10 * multiplier
    assert result.is_win is (multiplier > 0)


def test_only_three_sevens_is_a_jackpot() -> None:
    machine = SlotMachine()

    assert machine.evaluate((S.SEVEN, S.SEVEN, S.SEVEN)).is_jackpot
    assert not machine.evaluate((S.BAR, S.BAR, S.BAR)).is_jackpot


def test_paytable_weights_sum_to_one_hundred() -> None:
    assert sum(entry.weight for entry in PAYTABLE) == 100
    assert S.BLANK not in {entry.symbol for entry in SlotMachine().display_symbols}


def test_enumerated_rtp_and_configured_target() -> None:
    machine = SlotMachine()

    assert machine.theoretical_rtp() == pytest.approx(0.4344, abs=0.001)
    assert machine.target_rtp == pytest.approx(0.95)


def test_spins_land_on_paytable_symbols() -> None:
    machine = SlotMachine(CasinoRandomService(1))

    for _ in range(100):
        result = machine.spin()
        assert len(result.reels) == 3
        assert machine.calculate_winnings(10, result) == result.payout(10) - 10


def test_simulated_rtp_tracks_the_enumeration() -> None:
    machine = SlotMachine(CasinoRandomService(8))

    assert machine.simulate_rtp(30_000) == pytest.approx(
        machine.theoretical_rtp(), abs=0.1
    )
