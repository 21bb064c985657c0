"""Domain exceptions raised by the game logic and service layers."""

from __future__ import annotations


class GameRuleError(Exception):
    """Base class for every rejected game action."""


class InsufficientFundsError(GameRuleError):
    """Raised when the player cannot afford the requested action."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Need ${required}, have ${available}.")
        self.required = required
        self.available = available


class InvalidBetError(GameRuleError):
    """Raised when a stake or bet selection is malformed."""


class ItemNotFoundError(GameRuleError):
    """Raised when an item, round or job is unknown."""


class JobLimitReachedError(GameRuleError):
    """Raised when a street job has no paid attempts left."""


class ActionRejectedError(GameRuleError):
    """Raised when a store operation refuses to change state."""


class RoundStateError(GameRuleError):
    """Raised when a round-based game receives an out-of-order action."""


class InvalidMoveError(GameRuleError):
    """Raised when a puzzle move is malformed or not allowed right now."""


__all__ = [
    "ActionRejectedError",
    "GameRuleError",
    "InsufficientFundsError",
    "InvalidBetError",
    "InvalidMoveError",
    "ItemNotFoundError",
    "JobLimitReachedError",
    "RoundStateError",
]
