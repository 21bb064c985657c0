"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import pytest
from fastapi.testclient import TestClient

from casino_mafia_backend.api import create_api
from casino_mafia_backend.api.dependencies import get_auth_service, get_game_service
from casino_mafia_backend.api.services import GameService
from casino_mafia_backend.database import (
    DatabaseService,
    SqlGameStateStore,
    get_database,
)
from casino_mafia_backend.database.dependencies import (
    build_database_service,
    build_game_state_store,
)
from casino_mafia_backend.game_logic import GameStore, InMemoryGameStateStore
from casino_mafia_backend.settings import get_settings
from casino_mafia_backend.shared import CasinoRandomService

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, milliseconds: int) -> None:
        self.now += milliseconds


def _clear_caches() -> None:
    for cached in (
        get_settings,
        get_auth_service,
        get_game_service,
        build_database_service,
        build_game_state_store,
    ):
        cached.cache_clear()


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("AUTH_SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def state_store() -> InMemoryGameStateStore:
    return InMemoryGameStateStore()


@pytest.fixture
def store(state_store: InMemoryGameStateStore, clock: FakeClock) -> GameStore:
    return GameStore("player-1", state_store, clock=clock)


@pytest.fixture
def database(tmp_path: Path) -> DatabaseService:
    """File-backed SQLite database with every table created."""
    service = DatabaseService(f"sqlite:///{tmp_path / 'casino.db'}")
    service.create_schema()
    return service


class RegisteredPlayer(NamedTuple):
    id: str
    headers: dict[str, str]


@pytest.fixture
def api_rng() -> CasinoRandomService:
    return CasinoRandomService(1234)


@pytest.fixture
def api_games(
    database: DatabaseService, api_rng: CasinoRandomService, clock: FakeClock
) -> GameService:
    return GameService(SqlGameStateStore(database), rng=api_rng, clock=clock)


@pytest.fixture
def client(database: DatabaseService, api_games: GameService) -> Iterator[TestClient]:
    app = create_api()
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_game_service] = lambda: api_games
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _register(client: TestClient, nickname: str) -> RegisteredPlayer:
    response = client.post(
        "/auth/register",
        json={"nickname": nickname, "password": "Password123", "icon": "shark"},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return RegisteredPlayer(
        id=data["user"]["id"],
        headers={"Authorization": f"Bearer {data['token']['access_token']}"},
    )


@pytest.fixture
def register_player(client: TestClient) -> Callable[[str], RegisteredPlayer]:
    """Return a helper that signs up a player and returns its bearer headers."""
    return lambda nickname: _register(client, nickname)


@pytest.fixture
def player(client: TestClient) -> RegisteredPlayer:
    return _register(client, "PlayerOne")
