"""Core rules and mechanics that drive Casino Mafia gameplay."""

from casino_mafia_backend.game_logic.configuration import (
    CasinoOdds,
    GameRules,
    OddsConfiguration,
    RulesConfiguration,
    get_default_odds,
    get_default_rules,
)
from casino_mafia_backend.game_logic.errors import (
    ActionRejectedError,
    GameRuleError,
    InsufficientFundsError,
    InvalidBetError,
    InvalidMoveError,
    ItemNotFoundError,
    JobLimitReachedError,
    RoundStateError,
)
from casino_mafia_backend.game_logic.items import (
    MARKET_ITEMS,
    InventoryItem,
    get_market_item,
)
from casino_mafia_backend.game_logic.mafia import (
    MafiaEncounter,
    MafiaEventManager,
    MafiaEventResult,
    MafiaEventService,
)
from casino_mafia_backend.game_logic.navigation import (
    INITIAL_LOCATION,
    ROUTES,
    Route,
    RouteGroup,
    RouteLock,
    resolve,
    route_by_name,
    route_by_path,
    shell_routes,
)
from casino_mafia_backend.game_logic.persistence import (
    STORAGE_KEY,
    GameStateStore,
    InMemoryGameStateStore,
)
from casino_mafia_backend.game_logic.state import (
    JOB_COUNTER_FIELDS,
    GameState,
    clamp,
    xp_required_for_level,
)
from casino_mafia_backend.game_logic.store import GameStore
from casino_mafia_backend.game_logic.street_jobs import (
    PUZZLE_TYPES,
    CodeBreaker,
    GuessGame,
    MatchSamples,
    MathQuiz,
    StreetJobPuzzle,
)

__all__ = [
    "INITIAL_LOCATION",
    "JOB_COUNTER_FIELDS",
    "MARKET_ITEMS",
    "PUZZLE_TYPES",
    "ROUTES",
    "STORAGE_KEY",
    "ActionRejectedError",
    "CasinoOdds",
    "CodeBreaker",
    "GameRuleError",
    "GameRules",
    "GameState",
    "GameStateStore",
    "GameStore",
    "GuessGame",
    "InMemoryGameStateStore",
    "InsufficientFundsError",
    "InvalidBetError",
    "InvalidMoveError",
    "InventoryItem",
    "ItemNotFoundError",
    "JobLimitReachedError",
    "MafiaEncounter",
    "MafiaEventManager",
    "MafiaEventResult",
    "MafiaEventService",
    "MatchSamples",
    "MathQuiz",
    "OddsConfiguration",
    "Route",
    "RouteGroup",
    "RouteLock",
    "RoundStateError",
    "RulesConfiguration",
    "StreetJobPuzzle",
    "clamp",
    "get_default_odds",
    "get_default_rules",
    "get_market_item",
    "resolve",
    "route_by_name",
    "route_by_path",
    "shell_routes",
    "xp_required_for_level",
]
