"""European single-zero roulette."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from casino_mafia_backend.shared.rng import CasinoRandomService

POCKETS = 37

WHEEL_ORDER: tuple[int, ...] = (
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10,
    5, 24, 16, 33, 1, 20, 14, 31, 9, 22, 18, 29, 7, 28, 12, 35, 3, 26,
)  # fmt: skip

RED_NUMBERS: frozenset[int] = frozenset(
    {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
)

PocketColor = Literal["red", "black", "green"]


class RouletteBetType(StrEnum):
    """Supported roulette wagers."""

    SINGLE = "single"
    GREEN = "green"
    RED = "red"
    BLACK = "black"
    ODD = "odd"
    EVEN = "even"
    LOW = "low"
    HIGH = "high"
    DOZEN1 = "dozen1"
    DOZEN2 = "dozen2"
    DOZEN3 = "dozen3"
    COLUMN1 = "column1"
    COLUMN2 = "column2"
    COLUMN3 = "column3"


_STRAIGHT_UP = frozenset({RouletteBetType.SINGLE, RouletteBetType.GREEN})
_EVEN_MONEY = frozenset(
    {
        RouletteBetType.RED,
        RouletteBetType.BLACK,
        RouletteBetType.ODD,
        RouletteBetType.EVEN,
        RouletteBetType.LOW,
        RouletteBetType.HIGH,
    }
)

_WINNING_POCKETS: dict[RouletteBetType, int] = {
    RouletteBetType.SINGLE: 1,
    RouletteBetType.GREEN: 1,
    RouletteBetType.RED: 18,
    RouletteBetType.BLACK: 18,
    RouletteBetType.ODD: 18,
    RouletteBetType.EVEN: 18,
    RouletteBetType.LOW: 18,
    RouletteBetType.HIGH: 18,
    RouletteBetType.DOZEN1: 12,
    RouletteBetType.DOZEN2: 12,
    RouletteBetType.DOZEN3: 12,
    RouletteBetType.COLUMN1: 12,
    RouletteBetType.COLUMN2: 12,
    RouletteBetType.COLUMN3: 12,
}


def payout_multiplier(bet_type: RouletteBetType) -> int:
    """Return the "to one" odds paid on a winning *bet_type*."""
    if bet_type in _STRAIGHT_UP:
        return 35
    if bet_type in _EVEN_MONEY:
        return 1
    return 2


def pocket_color(number: int) -> PocketColor:
    if number == 0:
        return "green"
    return "red" if number in RED_NUMBERS else "black"


class RouletteBet(BaseModel):
    """Single wager on the layout."""

    model_config = ConfigDict(frozen=True)

    bet_type: RouletteBetType
    number: int | None = Field(default=None, ge=0, le=POCKETS - 1)
    amount: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _validate_number(self) -> RouletteBet:
        """Straight-up bets need a pocket; nothing else may name one."""
        if self.bet_type is RouletteBetType.SINGLE and self.number is None:
            msg = "Single-number bets require a number between 0 and 36."
            raise ValueError(msg)
        if self.bet_type is not RouletteBetType.SINGLE and self.number is not None:
            msg = "Only single-number bets may specify a number."
            raise ValueError(msg)
        return self

    @property
    def payout_multiplier(self) -> int:
        return payout_multiplier(self.bet_type)


class RouletteResult(BaseModel):
    """Pocket the ball landed in, plus its layout properties."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., ge=0, le=POCKETS - 1)
    color: PocketColor
    is_odd: bool
    is_low: bool
    dozen: int = Field(..., ge=0, le=3)
    column: int = Field(..., ge=0, le=3)
    payout: int = Field(default=0, ge=0)

    @property
    def won(self) -> bool:
        return self.payout > 0

    @classmethod
    def for_pocket(cls, number: int, payout: int = 0) -> RouletteResult:
        return cls(
            number=number,
            color=pocket_color(number),
            is_odd=number > 0 and number % 2 == 1,
            is_low=1 <= number <= 18,  # noqa: PLR2004
            dozen=0 if number == 0 else (number - 1) // 12 + 1,
            column=0 if number == 0 else (number - 1) % 3 + 1,
            payout=payout,
        )


class RouletteWheel:
    """Spin the wheel and settle bets against the winning pocket."""

    def __init__(self, rng: CasinoRandomService | None = None) -> None:
        self._rng = rng or CasinoRandomService()

    def spin(self, bet: RouletteBet | None = None) -> RouletteResult:
        """Spin once; when *bet* is given the result carries its payout."""
        result = RouletteResult.for_pocket(self._rng.next_int(POCKETS))
        if bet is None:
            return result
        return result.model_copy(update={"payout": self.calculate_payout(bet, result)})

    @staticmethod
    def check_win(bet: RouletteBet, result: RouletteResult) -> bool:  # noqa: PLR0911
        number = result.number
        match bet.bet_type:
            case RouletteBetType.SINGLE:
                return number == bet.number
            case RouletteBetType.GREEN:
                return number == 0
            case RouletteBetType.RED | RouletteBetType.BLACK:
                return result.color == bet.bet_type.value
            case RouletteBetType.ODD:
                return number > 0 and result.is_odd
            case RouletteBetType.EVEN:
                return number > 0 and not result.is_odd
            case RouletteBetType.LOW:
                return result.is_low
            case RouletteBetType.HIGH:
                return 19 <= number <= 36  # noqa: PLR2004
            case RouletteBetType.DOZEN1 | RouletteBetType.DOZEN2 | RouletteBetType.DOZEN3:
                return result.dozen == int(bet.bet_type.value[-1])
            case _:
                return result.column == int(bet.bet_type.value[-1])

    def calculate_payout(self, bet: RouletteBet, result: RouletteResult) -> int:
        """Return the total handed back for *bet*: stake plus winnings, or 0."""
        if not self.check_win(bet, result):
            return 0
        return bet.amount + bet.amount * bet.payout_multiplier

    def calculate_winnings(self, bet: RouletteBet, result: RouletteResult) -> int:
        if not self.check_win(bet, result):
            return -bet.amount
        return bet.amount * bet.payout_multiplier

    @staticmethod
    def theoretical_rtp(bet_type: RouletteBetType) -> float:
        """Every European layout bet returns 36/37 on average."""
        return _WINNING_POCKETS[bet_type] / POCKETS * (payout_multiplier(bet_type) + 1)

    def simulate_rtp(
        self,
        bet_type: RouletteBetType,
        rounds: int,
        *,
        number: int | None = None,
        stake: int = 100,
    ) -> float:
        bet = RouletteBet(bet_type=bet_type, number=number, amount=stake)
        total_return = sum(self.calculate_payout(bet, self.spin()) for _ in range(rounds))
        return total_return / (stake * rounds) if rounds else 0.0


__all__ = [
    "POCKETS",
    "RED_NUMBERS",
    "WHEEL_ORDER",
    "RouletteBet",
    "RouletteBetType",
    "RouletteResult",
    "RouletteWheel",
    "payout_multiplier",
    "pocket_color",
]
