"""Factory for constructing the FastAPI application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from casino_mafia_backend.api.errors import bet_validation_handler
from casino_mafia_backend.api.routers import (
    auth_router,
    buildings_router,
    casino_router,
    mafia_router,
    market_router,
    navigation_router,
    player_router,
    street_jobs_router,
)
from casino_mafia_backend.database.dependencies import build_database_service
from casino_mafia_backend.settings import BackendSettings, get_settings
from casino_mafia_backend.shared import configure_logging

logger = logging.getLogger(__name__)


def create_api(settings: BackendSettings | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    config = settings or get_settings()
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if config.auto_create_schema:
            logger.info("Creating database schema for %s.", config.database_url)
            build_database_service(config.database_url).create_schema()
        yield

    app = FastAPI(title="Casino Mafia API", lifespan=lifespan)
    app.add_exception_handler(RequestValidationError, bet_validation_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in (
        auth_router,
        player_router,
        market_router,
        buildings_router,
        casino_router,
        street_jobs_router,
        mafia_router,
        navigation_router,
    ):
        app.include_router(router)
    return app


__all__ = ["create_api"]
