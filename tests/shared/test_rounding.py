"""Tests for half-up rounding."""

import pytest

from casino_mafia_backend.shared import round_half_up


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-0.5, -1), (280.0, 280)],
)
def test_round_half_up_rounds_ties_away_from_zero(value: float, expected: int) -> None:
    assert round_half_up(value) == expected
