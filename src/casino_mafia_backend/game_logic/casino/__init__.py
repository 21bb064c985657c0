"""Casino floor games and the RTP simulation built on them."""

from casino_mafia_backend.game_logic.casino.aviator import (
    AviatorFlight,
    AviatorGame,
    FlightStatus,
)
from casino_mafia_backend.game_logic.casino.blackjack import (
    BlackjackHand,
    BlackjackOutcome,
    BlackjackResult,
    BlackjackRound,
    BlackjackTable,
    Card,
)
from casino_mafia_backend.game_logic.casino.coin_flip import (
    CoinFlip,
    CoinFlipResult,
    CoinSide,
)
from casino_mafia_backend.game_logic.casino.horse_race import (
    HORSES,
    Horse,
    HorseRace,
    HorseRaceResult,
)
from casino_mafia_backend.game_logic.casino.roulette import (
    RouletteBet,
    RouletteBetType,
    RouletteResult,
    RouletteWheel,
)
from casino_mafia_backend.game_logic.casino.simulation import (
    CasinoSimulationService,
    SimulationResult,
)
from casino_mafia_backend.game_logic.casino.slots import (
    PAYTABLE,
    SlotMachine,
    SlotResult,
    SlotSymbol,
)

__all__ = [
    "HORSES",
    "PAYTABLE",
    "AviatorFlight",
    "AviatorGame",
    "BlackjackHand",
    "BlackjackOutcome",
    "BlackjackResult",
    "BlackjackRound",
    "BlackjackTable",
    "Card",
    "CasinoSimulationService",
    "CoinFlip",
    "CoinFlipResult",
    "CoinSide",
    "FlightStatus",
    "Horse",
    "HorseRace",
    "HorseRaceResult",
    "RouletteBet",
    "RouletteBetType",
    "RouletteResult",
    "RouletteWheel",
    "SimulationResult",
    "SlotMachine",
    "SlotResult",
    "SlotSymbol",
]
