"""Declarative route table shared with clients.

Routes are addressed by a unique name and a URL-like path. Tab routes render
inside the persistent bottom-navigation shell; every other route is a
full-screen page pushed over it. Two buildings stay locked until the player
has been rich enough to unlock them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.state import GameState  # noqa: TC001


class RouteGroup(StrEnum):
    """Feature area a route belongs to."""

    TAB = "tab"
    STREET_JOBS = "street_jobs"
    CASINO = "casino"
    BUILDINGS = "buildings"
    STATS = "stats"


class RouteLock(StrEnum):
    """Unlock flag that gates access to a route."""

    BODYGUARDS = "bodyguards"
    GANG = "gang"


class Route(BaseModel):
    """Single named entry of the navigation table."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    path: str = Field(..., pattern=r"^/[a-z-]*$")
    title: str
    group: RouteGroup
    in_shell: bool = False
    lock: RouteLock | None = None

    def is_locked(self, state: GameState) -> bool:
        """Return whether *state* is still barred from this route."""
        if self.lock is RouteLock.BODYGUARDS:
            return not state.bodyguard_unlocked
        if self.lock is RouteLock.GANG:
            return not state.gang_unlocked
        return False


INITIAL_LOCATION = "/casino"


def _route(
    path: str,
    title: str,
    group: RouteGroup,
    *,
    in_shell: bool = False,
    lock: RouteLock | None = None,
) -> Route:
    return Route(
        name=path.removeprefix("/"),
        path=path,
        title=title,
        group=group,
        in_shell=in_shell,
        lock=lock,
    )


ROUTES: tuple[Route, ...] = (
    _route("/casino", "Casino", RouteGroup.TAB, in_shell=True),
    _route("/inventory", "Inventory", RouteGroup.TAB, in_shell=True),
    _route("/market", "Market", RouteGroup.TAB, in_shell=True),
    _route("/buildings", "Buildings", RouteGroup.TAB, in_shell=True),
    _route("/street-jobs", "Street Jobs", RouteGroup.STREET_JOBS),
    _route("/math-quiz", "Math Quiz", RouteGroup.STREET_JOBS),
    _route("/match-samples", "Match Samples", RouteGroup.STREET_JOBS),
    _route("/code-breaker", "Code Breaker", RouteGroup.STREET_JOBS),
    _route("/guess-game", "Guess Game", RouteGroup.STREET_JOBS),
    _route("/roulette", "Roulette", RouteGroup.CASINO),
    _route("/blackjack", "Blackjack", RouteGroup.CASINO),
    _route("/horse-race", "Horse Race", RouteGroup.CASINO),
    _route("/coin-flip", "Coin Flip", RouteGroup.CASINO),
    _route("/slot-machine", "Slot Machine", RouteGroup.CASINO),
    _route("/aviator", "Aviator", RouteGroup.CASINO),
    _route("/dev-simulation", "RTP Simulation", RouteGroup.CASINO),
    _route("/home", "Home", RouteGroup.BUILDINGS),
    _route("/hospital", "Hospital", RouteGroup.BUILDINGS),
    _route(
        "/secure-building",
        "Secure Building",
        RouteGroup.BUILDINGS,
        lock=RouteLock.BODYGUARDS,
    ),
    _route(
        "/gang-building", "Gang Headquarters", RouteGroup.BUILDINGS, lock=RouteLock.GANG
    ),
    _route("/stats", "Stats", RouteGroup.STATS),
)

_BY_NAME = {route.name: route for route in ROUTES}
_BY_PATH = {route.path: route for route in ROUTES}


def route_by_name(name: str) -> Route | None:
    return _BY_NAME.get(name)


def route_by_path(path: str) -> Route | None:
    return _BY_PATH.get(path)


def resolve(path: str | None) -> Route:
    """Return the route for *path*, or the initial location when unknown."""
    if path:
        route = _BY_PATH.get(path.rstrip("/") or "/")
        if route is not None:
            return route
    return _BY_PATH[INITIAL_LOCATION]


def shell_routes() -> tuple[Route, ...]:
    """Return the tab routes in bottom-navigation order."""
    return tuple(route for route in ROUTES if route.in_shell)


__all__ = [
    "INITIAL_LOCATION",
    "ROUTES",
    "Route",
    "RouteGroup",
    "RouteLock",
    "resolve",
    "route_by_name",
    "route_by_path",
    "shell_routes",
]
