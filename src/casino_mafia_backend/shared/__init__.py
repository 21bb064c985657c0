"""Shared utilities, shared models and cross-cutting helpers for the backend."""

from casino_mafia_backend.shared.enums import AvatarIcon, CasinoGame, StreetJob
from casino_mafia_backend.shared.events import ActivityEvent, ActivityLog
from casino_mafia_backend.shared.log_config import configure_logging
from casino_mafia_backend.shared.rng import CasinoRandomService
from casino_mafia_backend.shared.rounding import round_half_up

__all__ = [
    "ActivityEvent",
    "ActivityLog",
    "AvatarIcon",
    "CasinoGame",
    "CasinoRandomService",
    "StreetJob",
    "configure_logging",
    "round_half_up",
]
