"""Tests for mafia extortion events."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from casino_mafia_backend.game_logic import (
    GameState,
    GameStore,
    InMemoryGameStateStore,
    MafiaEventManager,
    MafiaEventService,
    RoundStateError,
)
from casino_mafia_backend.shared import CasinoRandomService

if TYPE_CHECKING:
    from tests.conftest import FakeClock


class ScriptedRandom(CasinoRandomService):
    """RNG replaying scripted draws; an exhausted script yields zeros."""

    def __init__(
        self, doubles: tuple[float, ...] = (), ints: tuple[int, ...] = ()
    ) -> None:
        super().__init__(0)
        self._doubles = list(doubles)
        self._ints = list(ints)

    def next_double(self) -> float:
        return self._doubles.pop(0) if self._doubles else 0.0

    def next_int(self, upper: int) -> int:
        return self._ints.pop(0) if self._ints else 0


def make_manager(
    clock: FakeClock, rng: CasinoRandomService | None = None, **state: object
) -> tuple[GameStore, MafiaEventManager]:
    store = GameStore(
        "player-1",
        InMemoryGameStateStore(),
        state=GameState(**{"money": 20_000, **state}),
        clock=clock,
    )
    service = MafiaEventService(rng or ScriptedRandom(), clock=clock)
    return store, MafiaEventManager(store, service)


def test_poor_players_are_left_alone(clock: FakeClock) -> None:
    _, manager = make_manager(clock, money=10_000)

    assert manager.check_and_trigger() is None
    assert manager.force_trigger() is None


def test_trigger_roll_and_cooldown(clock: FakeClock) -> None:
    rng = ScriptedRandom(doubles=(0.30, 0.29))
    _, manager = make_manager(clock, rng)

    assert manager.check_and_trigger() is None
    encounter = manager.check_and_trigger()

    assert encounter is not None
    assert encounter.triggered_at_ms == clock.now
    assert manager.service.last_event_ms == clock.now
    assert manager.service.cooldown_remaining_ms() == 300_000
    assert manager.check_and_trigger() == encounter

    manager.dismiss()
    clock.advance(299_999)
    assert manager.check_and_trigger() is None
    clock.advance(1)
    assert manager.service.cooldown_remaining_ms() == 0


def test_force_ignores_the_cooldown_and_reset_clears_it(clock: FakeClock) -> None:
    _, manager = make_manager(clock)

    manager.force_trigger()
    manager.dismiss()
    assert manager.force_trigger() is not None
    assert manager.service.cooldown_remaining_ms() > 0

    manager.reset_cooldown()
    assert manager.service.cooldown_remaining_ms() == 0


def test_tribute_scales_with_wealth(clock: FakeClock) -> None:
    _, manager = make_manager(clock, ScriptedRandom(ints=(550,)))
    state = GameState(money=20_000)

    assert (state.min_tribute, state.max_tribute) == (1_200, 1_750)
    assert manager.service.generate_tribute(state) == 1_750


def test_paying_the_tribute(clock: FakeClock) -> None:
    store, manager = make_manager(clock)
    manager.force_trigger()

    result = manager.pay_tribute()

    assert result.paid_tribute
    assert result.money_lost == 1_200
    assert store.state.money == 18_800
    assert manager.encounter is None


def test_unaffordable_tribute_still_closes_the_encounter(clock: FakeClock) -> None:
    store, manager = make_manager(clock)
    manager.force_trigger()
    store.set_money(500)

    result = manager.pay_tribute()

    assert not result.paid_tribute
    assert result.money_lost == 0
    assert store.state.money == 500
    assert manager.encounter is None


def test_fighting_alone_costs_hp(clock: FakeClock) -> None:
    store, manager = make_manager(clock, ScriptedRandom(ints=(0, 4)))
    manager.force_trigger()

    result = manager.fight()

    assert result.hp_lost == 34
    assert store.state.hp == 66
    assert store.state.family_happiness == 95
    assert "bodyguards" not in result.message


def test_bodyguards_cap_damage_at_the_minimum(clock: FakeClock) -> None:
    store, manager = make_manager(clock, bodyguards=10)
    manager.force_trigger()

    result = manager.fight()

    assert result.hp_lost == 5
    assert store.state.hp == 95
    assert "bodyguards reduced" in result.message


def test_gang_fights_instead_of_the_player(clock: FakeClock) -> None:
    store, manager = make_manager(clock, ScriptedRandom(ints=(0, 1)), gang_mates=3)
    manager.force_trigger()

    result = manager.fight()

    assert result.gang_lost == 2
    assert store.state.gang_mates == 1
    assert store.state.hp == 100
    assert result.message.endswith("2 gang members.")


def test_fight_damage_is_capped_for_the_very_rich(clock: FakeClock) -> None:
    _, manager = make_manager(clock)

    assert manager.service.calculate_fight_damage(GameState(money=900_000)) == 60


def test_resolving_without_an_encounter_fails(clock: FakeClock) -> None:
    _, manager = make_manager(clock)

    with pytest.raises(RoundStateError):
        manager.pay_tribute()
    with pytest.raises(RoundStateError):
        manager.fight()
