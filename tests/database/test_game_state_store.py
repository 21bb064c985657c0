"""Tests for the SQL-backed game state store."""

from uuid import uuid4

from casino_mafia_backend.database import (
    DatabaseService,
    GameStateRepository,
    SqlGameStateStore,
    UserRepository,
)
from casino_mafia_backend.game_logic import GameState, GameStore, get_market_item
from casino_mafia_backend.shared import AvatarIcon


def _create_user(database: DatabaseService) -> str:
    with database.session() as session:
        user = UserRepository(session).create(
            nickname="lucky", password_hash="x", icon=AvatarIcon.SHARK
        )
        return str(user.id)


def test_unknown_player_has_no_state(database: DatabaseService) -> None:
    assert SqlGameStateStore(database).load_state(str(uuid4())) is None


def test_state_survives_a_round_trip(database: DatabaseService) -> None:
    player_id = _create_user(database)
    store = SqlGameStateStore(database)
    banana = get_market_item("banana")
    assert banana is not None
    state = GameState(money=4_321, inventory=(banana.with_quantity(3),))

    store.save_state(player_id, state)
    store.save_state(player_id, state.model_copy(update={"hp": 42}))

    loaded = store.load_state(player_id)
    assert loaded is not None
    assert loaded.money == 4_321
    assert loaded.hp == 42
    assert loaded.inventory[0].quantity == 3


def test_payload_is_stored_in_camel_case(database: DatabaseService) -> None:
    player_id = _create_user(database)
    SqlGameStateStore(database).save_state(player_id, GameState(gang_mates=2))

    with database.session() as session:
        payload = GameStateRepository(session).get_payload(uuid4())
        assert payload is None
        row_payload = GameStateRepository(session).get_payload(
            UserRepository(session).get_by_nickname("lucky").id
        )

    assert row_payload is not None
    assert row_payload["gangMates"] == 2
    assert "gang_mates" not in row_payload


def test_unreadable_payload_falls_back_to_defaults(database: DatabaseService) -> None:
    player_id = _create_user(database)
    with database.session() as session:
        user = UserRepository(session).get_by_nickname("lucky")
        GameStateRepository(session).upsert(user.id, {"money": "lots"})

    assert SqlGameStateStore(database).load_state(player_id) == GameState()


def test_game_store_persists_through_the_database(database: DatabaseService) -> None:
    player_id = _create_user(database)
    state_store = SqlGameStateStore(database)

    GameStore(player_id, state_store).add_money(900)

    assert GameStore.load(player_id, state_store).state.money == 1_000


def test_user_repository_creates_and_finds_accounts(database: DatabaseService) -> None:
    player_id = _create_user(database)

    with database.session() as session:
        users = UserRepository(session)
        user = users.get_by_nickname("lucky")
        assert user is not None
        assert str(user.id) == player_id
        assert user.created_at is not None
        assert users.get_by_id(user.id) is user
        assert users.get_by_nickname("LUCKY") is None
        assert users.nickname_taken("LUCKY")
        assert not users.nickname_taken("unlucky")
