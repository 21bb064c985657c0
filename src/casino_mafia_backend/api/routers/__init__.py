"""Route definitions for the public HTTP endpoints."""

from casino_mafia_backend.api.routers.auth import router as auth_router
from casino_mafia_backend.api.routers.buildings import router as buildings_router
from casino_mafia_backend.api.routers.casino import router as casino_router
from casino_mafia_backend.api.routers.mafia import router as mafia_router
from casino_mafia_backend.api.routers.market import router as market_router
from casino_mafia_backend.api.routers.navigation import router as navigation_router
from casino_mafia_backend.api.routers.player import router as player_router
from casino_mafia_backend.api.routers.street_jobs import router as street_jobs_router

__all__ = [
    "auth_router",
    "buildings_router",
    "casino_router",
    "mafia_router",
    "market_router",
    "navigation_router",
    "player_router",
    "street_jobs_router",
]
