"""Pydantic models for navigation endpoints."""

# ruff: noqa: TC001

from __future__ import annotations

from pydantic import BaseModel

from casino_mafia_backend.game_logic import Route


class RouteEntry(BaseModel):
    route: Route
    locked: bool


class RoutesResponse(BaseModel):
    initial_location: str
    routes: list[RouteEntry]


class NavigateRequest(BaseModel):
    path: str


class NavigateResponse(BaseModel):
    """Where the player ended up; unknown paths land on the initial location."""

    route: Route


__all__ = ["NavigateRequest", "NavigateResponse", "RouteEntry", "RoutesResponse"]
