"""Models used for API request and response payloads."""

from casino_mafia_backend.api.models.auth import (
    AuthTokenResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
    UserSessionResponse,
)
from casino_mafia_backend.api.models.casino import (
    AviatorFlightResponse,
    AviatorStartRequest,
    BlackjackRoundResponse,
    CardResponse,
    CasinoInfoResponse,
    CoinFlipRequest,
    CoinFlipResponse,
    HorseOdds,
    HorseRaceRequest,
    HorseRaceResponse,
    RouletteBetRequest,
    RouletteResponse,
    SimulationResponse,
    SlotSpinResponse,
    StakeRequest,
)
from casino_mafia_backend.api.models.jobs import (
    CodeGuessRequest,
    CodeGuessResponse,
    JobPuzzleResponse,
    MatchFlipRequest,
    MatchFlipResponse,
    MathAnswerRequest,
    MathAnswerResponse,
    NumberGuessRequest,
    NumberGuessResponse,
)
from casino_mafia_backend.api.models.mafia import (
    MafiaEncounterResponse,
    MafiaResolutionResponse,
    MafiaStatusResponse,
)
from casino_mafia_backend.api.models.navigation import (
    NavigateRequest,
    NavigateResponse,
    RouteEntry,
    RoutesResponse,
)
from casino_mafia_backend.api.models.player import (
    ActivityResponse,
    DonationRequest,
    HomeVisitResponse,
    HospitalResponse,
    InventoryResponse,
    JobAttempts,
    MarketResponse,
    PlayerStateResponse,
    PlayerStatsResponse,
    RecruitRequest,
    SuggestedDonationResponse,
    UseItemResponse,
)

__all__ = [
    "ActivityResponse",
    "AuthTokenResponse",
    "AviatorFlightResponse",
    "AviatorStartRequest",
    "BlackjackRoundResponse",
    "CardResponse",
    "CasinoInfoResponse",
    "CodeGuessRequest",
    "CodeGuessResponse",
    "CoinFlipRequest",
    "CoinFlipResponse",
    "DonationRequest",
    "HomeVisitResponse",
    "HorseOdds",
    "HorseRaceRequest",
    "HorseRaceResponse",
    "HospitalResponse",
    "InventoryResponse",
    "JobAttempts",
    "JobPuzzleResponse",
    "MafiaEncounterResponse",
    "MafiaResolutionResponse",
    "MafiaStatusResponse",
    "MarketResponse",
    "MatchFlipRequest",
    "MatchFlipResponse",
    "MathAnswerRequest",
    "MathAnswerResponse",
    "NavigateRequest",
    "NavigateResponse",
    "NumberGuessRequest",
    "NumberGuessResponse",
    "PlayerStateResponse",
    "PlayerStatsResponse",
    "RecruitRequest",
    "RouletteBetRequest",
    "RouletteResponse",
    "RouteEntry",
    "RoutesResponse",
    "SimulationResponse",
    "SlotSpinResponse",
    "StakeRequest",
    "SuggestedDonationResponse",
    "UseItemResponse",
    "UserLoginRequest",
    "UserRegisterRequest",
    "UserResponse",
    "UserSessionResponse",
]
