"""Tests for the coin flip."""

import pytest

from casino_mafia_backend.game_logic import get_default_odds
from casino_mafia_backend.game_logic.casino import CoinFlip, CoinSide
from casino_mafia_backend.shared import CasinoRandomService


class FixedSide(CasinoRandomService):
    def __init__(self, heads: bool) -> None:
        super().__init__(0)
        self.heads = heads

    def next_bool(self) -> bool:
        return self.heads


def test_payout_is_shaved_by_the_house_edge() -> None:
    game = CoinFlip()

    assert game.payout_multiplier == pytest.approx(1.96)
    assert game.payout_display == "1.96x"
    assert game.theoretical_rtp() == pytest.approx(0.98)


def test_correct_call_pays() -> None:
    game = CoinFlip(FixedSide(heads=True))

    result = game.play(CoinSide.HEADS)

    assert result.player_wins
    assert result.payout(100) == 196
    assert game.calculate_winnings(100, result) == 96


def test_wrong_call_loses_the_stake() -> None:
    game = CoinFlip(FixedSide(heads=False))

    result = game.play(CoinSide.HEADS)

    assert result.side is CoinSide.TAILS
    assert result.payout(100) == 0
    assert result.payout_multiplier == 0.0
    assert game.calculate_winnings(100, result) == -100


def test_house_edge_comes_from_the_odds() -> None:
    odds = get_default_odds().model_copy(update={"coin_flip_house_edge": 0.1})

    assert CoinFlip(odds=odds).payout_multiplier == pytest.approx(1.8)


def test_simulated_rtp_is_close_to_theory() -> None:
    game = CoinFlip(CasinoRandomService(9))

    assert game.simulate_rtp(20_000) == pytest.approx(0.98, abs=0.03)
