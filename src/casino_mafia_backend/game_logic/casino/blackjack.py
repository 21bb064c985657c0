"""Blackjack dealt from a multi-deck shoe.

Rounds are immutable snapshots. The :class:`BlackjackTable` owns the shoe and
advances a round through ``deal`` -> ``hit``/``stand`` until it settles. A
natural blackjack or a hand reaching 21 stands automatically; a bust settles
immediately without the dealer drawing.
"""

from __future__ import annotations

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

BLACKJACK = 21
DEALER_STAND_VALUE = 17
RESHUFFLE_THRESHOLD = 52


class CardSuit(StrEnum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class CardRank(StrEnum):
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


_SUIT_SYMBOLS = {
    CardSuit.HEARTS: "♥",
    CardSuit.DIAMONDS: "♦",
    CardSuit.CLUBS: "♣",
    CardSuit.SPADES: "♠",
}
_FACE_RANKS = frozenset({CardRank.JACK, CardRank.QUEEN, CardRank.KING})


class Card(BaseModel):
    """Single playing card."""

    model_config = ConfigDict(frozen=True)

    suit: CardSuit
    rank: CardRank

    @property
    def base_value(self) -> int:
        """Return the card's count with aces high."""
        if self.rank is CardRank.ACE:
            return 11
        if self.rank in _FACE_RANKS:
            return 10
        return int(self.rank.value)

    @property
    def is_ace(self) -> bool:
        return self.rank is CardRank.ACE

    @property
    def is_red(self) -> bool:
        return self.suit in {CardSuit.HEARTS, CardSuit.DIAMONDS}

    @property
    def label(self) -> str:
        return f"{self.rank.value}{_SUIT_SYMBOLS[self.suit]}"


class BlackjackHand(BaseModel):
    """Ordered cards held by one side of the table."""

    model_config = ConfigDict(frozen=True)

    cards: tuple[Card, ...] = Field(default_factory=tuple)

    def add(self, card: Card) -> BlackjackHand:
        return BlackjackHand(cards=(*self.cards, card))

    def _best_total(self) -> tuple[int, int]:
        """Return the best total and how many aces still count as 11."""
        total = sum(card.base_value for card in self.cards)
        aces = sum(1 for card in self.cards if card.is_ace)
        while total > BLACKJACK and aces > 0:
            total -= 10
            aces -= 1
        return total, aces

    @property
    def value(self) -> int:
        return self._best_total()[0]

    @property
    def is_soft(self) -> bool:
        return self._best_total()[1] > 0

    @property
    def is_blackjack(self) -> bool:
        return len(self.cards) == 2 and self.value == BLACKJACK  # noqa: PLR2004

    @property
    def is_bust(self) -> bool:
        return self.value > BLACKJACK

    @property
    def can_hit(self) -> bool:
        return self.value < BLACKJACK


class BlackjackOutcome(StrEnum):
    PLAYER_BLACKJACK = "player_blackjack"
    PLAYER_WINS = "player_wins"
    DEALER_WINS = "dealer_wins"
    PUSH = "push"
    PLAYER_BUSTS = "player_busts"
    DEALER_BUSTS = "dealer_busts"


class BlackjackResult(BaseModel):
    """Settled outcome of a hand and the amount it returns."""

    model_config = ConfigDict(frozen=True)

    outcome: BlackjackOutcome
    player_value: int
    dealer_value: int
    payout_multiplier: float
    stake: int = Field(default=0, ge=0)

    @property
    def payout(self) -> int:
        """Return 0 for a loss, the stake for a push, stake plus winnings otherwise."""
        if self.payout_multiplier < 0:
            return 0
        return self.stake + round_half_up(self.stake * self.payout_multiplier)

    @property
    def won(self) -> bool:
        return self.payout_multiplier >= 0


class RoundStatus(StrEnum):
    PLAYER_TURN = "player_turn"
    SETTLED = "settled"


class BlackjackRound(BaseModel):
    """Snapshot of a hand in play."""

    model_config = ConfigDict(frozen=True)

    round_id: str = Field(default_factory=lambda: uuid4().hex)
    stake: int = Field(..., ge=0)
    player: BlackjackHand = Field(default_factory=BlackjackHand)
    dealer: BlackjackHand = Field(default_factory=BlackjackHand)
    status: RoundStatus = RoundStatus.PLAYER_TURN
    result: BlackjackResult | None = None

    @property
    def is_settled(self) -> bool:
        return self.status is RoundStatus.SETTLED

    @property
    def dealer_upcard(self) -> Card | None:
        return self.dealer.cards[0] if self.dealer.cards else None


class BlackjackShoe:
    """Multi-deck shoe shuffled with Fisher-Yates using the casino RNG."""

    def __init__(self, rng: CasinoRandomService, decks: int) -> None:
        self._rng = rng
        self._decks = decks
        self._cards: list[Card] = []
        self.rebuild()

    def __len__(self) -> int:
        return len(self._cards)

    def rebuild(self) -> None:
        cards = [
            Card(suit=suit, rank=rank)
            for _ in range(self._decks)
            for suit in CardSuit
            for rank in CardRank
        ]
        for index in range(len(cards) - 1, 0, -1):
            swap = self._rng.next_int(index + 1)
            cards[index], cards[swap] = cards[swap], cards[index]
        self._cards = cards

    def draw(self) -> Card:
        if not self._cards:
            self.rebuild()
        return self._cards.pop()


def determine_outcome(
    player: BlackjackHand,
    dealer: BlackjackHand,
    *,
    stake: int = 0,
    natural_payout: float = 1.5,
) -> BlackjackResult:
    """Compare finished hands and price the result."""
    player_value = player.value
    dealer_value = dealer.value
    if player.is_bust:
        outcome, multiplier = BlackjackOutcome.PLAYER_BUSTS, -1.0
    elif player.is_blackjack:
        if dealer.is_blackjack:
            outcome, multiplier = BlackjackOutcome.PUSH, 0.0
        else:
            outcome, multiplier = BlackjackOutcome.PLAYER_BLACKJACK, natural_payout
    elif dealer.is_bust:
        outcome, multiplier = BlackjackOutcome.DEALER_BUSTS, 1.0
    elif player_value > dealer_value:
        outcome, multiplier = BlackjackOutcome.PLAYER_WINS, 1.0
    elif dealer_value > player_value:
        outcome, multiplier = BlackjackOutcome.DEALER_WINS, -1.0
    else:
        outcome, multiplier = BlackjackOutcome.PUSH, 0.0
    return BlackjackResult(
        outcome=outcome,
        player_value=player_value,
        dealer_value=dealer_value,
        payout_multiplier=multiplier,
        stake=stake,
    )


class BlackjackTable:
    """Deal and settle blackjack rounds from a persistent shoe."""

    def __init__(
        self,
        rng: CasinoRandomService | None = None,
        *,
        odds: OddsConfiguration | None = None,
    ) -> None:
        self._rng = rng or CasinoRandomService()
        self._odds = odds or get_default_odds()
        self._shoe = BlackjackShoe(self._rng, self._odds.blackjack_decks)

    @property
    def cards_remaining(self) -> int:
        return len(self._shoe)

    def deal(self, stake: int) -> BlackjackRound:
        """Start a round: player, dealer, player, dealer."""
        if len(self._shoe) < RESHUFFLE_THRESHOLD:
            self._shoe.rebuild()
        player = BlackjackHand()
        dealer = BlackjackHand()
        for _ in range(2):
            player = player.add(self._shoe.draw())
            dealer = dealer.add(self._shoe.draw())
        round_ = BlackjackRound(stake=stake, player=player, dealer=dealer)
        if player.is_blackjack:
            return self._finish(round_)
        return round_

    def hit(self, round_: BlackjackRound) -> BlackjackRound:
        """Draw a card for the player; bust settles, 21 stands."""
        self._require_player_turn(round_)
        if not round_.player.can_hit:
            return self._finish(round_)
        player = round_.player.add(self._shoe.draw())
        updated = round_.model_copy(update={"player": player})
        if player.is_bust:
            return self._settle(updated)
        if player.value == BLACKJACK:
            return self._finish(updated)
        return updated

    def stand(self, round_: BlackjackRound) -> BlackjackRound:
        self._require_player_turn(round_)
        return self._finish(round_)

    def dealer_should_hit(self, dealer: BlackjackHand) -> bool:
        value = dealer.value
        if value < DEALER_STAND_VALUE:
            return True
        if value == DEALER_STAND_VALUE and dealer.is_soft:
            return not self._odds.blackjack_dealer_stands_on_soft_17
        return False

    def play_dealer(self, dealer: BlackjackHand) -> BlackjackHand:
        while self.dealer_should_hit(dealer):
            dealer = dealer.add(self._shoe.draw())
        return dealer

    def _finish(self, round_: BlackjackRound) -> BlackjackRound:
        dealer = self.play_dealer(round_.dealer)
        return self._settle(round_.model_copy(update={"dealer": dealer}))

    def _settle(self, round_: BlackjackRound) -> BlackjackRound:
        result = determine_outcome(
            round_.player,
            round_.dealer,
            stake=round_.stake,
            natural_payout=self._odds.blackjack_natural_payout,
        )
        return round_.model_copy(
            update={"status": RoundStatus.SETTLED, "result": result}
        )

    @staticmethod
    def _require_player_turn(round_: BlackjackRound) -> None:
        if round_.is_settled:
            msg = "This blackjack round is already settled."
            raise RoundStateError(msg)

    def theoretical_rtp(self) -> float:
        """Approximate return for basic-strategy play."""
        return self._odds.blackjack_theoretical_rtp

    def simulate_rtp(self, hands: int, *, stake: int = 100) -> float:
        """Play *hands* rounds hitting below 17 and return the observed RTP."""
        total_return = 0
        for _ in range(hands):
            round_ = self.deal(stake)
            while not round_.is_settled and round_.player.value < DEALER_STAND_VALUE:
                round_ = self.hit(round_)
            if not round_.is_settled:
                round_ = self.stand(round_)
            if round_.result is not None:
                total_return += round_.result.payout
        return total_return / (stake * hands) if hands else 0.0


__all__ = [
    "BlackjackHand",
    "BlackjackOutcome",
    "BlackjackResult",
    "BlackjackRound",
    "BlackjackShoe",
    "BlackjackTable",
    "Card",
    "CardRank",
    "CardSuit",
    "RoundStatus",
    "determine_outcome",
]
