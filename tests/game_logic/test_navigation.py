"""Tests for the declarative route table."""

from casino_mafia_backend.game_logic import (
    INITIAL_LOCATION,
    ROUTES,
    GameState,
    RouteGroup,
    RouteLock,
    resolve,
    route_by_name,
    route_by_path,
    shell_routes,
)


def test_names_and_paths_are_unique() -> None:
    assert len({route.name for route in ROUTES}) == len(ROUTES)
    assert len({route.path for route in ROUTES}) == len(ROUTES)


def test_shell_holds_the_four_tabs_in_order() -> None:
    assert [route.path for route in shell_routes()] == [
        "/casino",
        "/inventory",
        "/market",
        "/buildings",
    ]
    assert all(route.group is RouteGroup.TAB for route in shell_routes())


def test_unknown_paths_resolve_to_the_initial_location() -> None:
    assert resolve(None).path == INITIAL_LOCATION
    assert resolve("/nowhere").path == INITIAL_LOCATION
    assert resolve("/hospital/").name == "hospital"


def test_lookups() -> None:
    assert route_by_path("/aviator") == route_by_name("aviator")
    assert route_by_name("missing") is None
    assert route_by_path("/dev-simulation").group is RouteGroup.CASINO


def test_buildings_stay_locked_until_unlocked() -> None:
    secure = route_by_name("secure-building")
    gang = route_by_name("gang-building")
    assert secure is not None
    assert gang is not None
    assert secure.lock is RouteLock.BODYGUARDS

    fresh = GameState()
    assert secure.is_locked(fresh)
    assert gang.is_locked(fresh)

    partly = GameState(bodyguard_unlocked=True)
    assert not secure.is_locked(partly)
    assert gang.is_locked(partly)

    assert not route_by_name("home").is_locked(fresh)
