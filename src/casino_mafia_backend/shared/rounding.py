"""Rounding helpers matching the game's payout conventions."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded away from zero.

    Payouts, tribute amounts and XP thresholds all round this way; the
    builtin :func:`round` rounds halves to even.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


__all__ = ["round_half_up"]
