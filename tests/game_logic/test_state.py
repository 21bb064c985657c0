"""Tests for the player game state snapshot."""

import pytest

from casino_mafia_backend.game_logic import (
    GameState,
    InventoryItem,
    xp_required_for_level,
)
from casino_mafia_backend.shared import StreetJob


def test_defaults_match_a_fresh_game() -> None:
    state = GameState()

    assert (state.money, state.hp, state.hunger, state.level) == (100, 100, 100, 1)
    assert state.xp_to_next_level == 100
    assert state.hospital_cost == 1_500
    assert not state.bodyguard_unlocked
    assert not state.gang_unlocked
    assert state.inventory == ()
    assert all(state.attempts_left(job) == 3 for job in StreetJob)


def test_job_attempts_run_out_after_three_completions() -> None:
    state = GameState(code_breaker_count=3, guess_game_count=2)

    assert not state.can_play(StreetJob.CODE_BREAKER)
    assert state.attempts_left(StreetJob.GUESS_GAME) == 1
    assert state.can_play(StreetJob.MATH_QUIZ)


def test_broken_family_caps_hp() -> None:
    assert GameState(family_broken=True).effective_max_hp == 75
    assert GameState(max_hp=120).effective_max_hp == 120


@pytest.mark.parametrize(
    ("money", "active", "bodyguards", "gang"),
    [
        (10_000, False, False, False),
        (10_001, True, False, False),
        (50_000, True, True, False),
        (100_000, True, True, True),
    ],
)
def test_money_thresholds(
    money: int, active: bool, bodyguards: bool, gang: bool
) -> None:
    state = GameState(money=money)

    assert state.is_mafia_active is active
    assert state.can_unlock_bodyguards is bodyguards
    assert state.can_unlock_gang is gang


def test_tribute_range_grows_with_wealth() -> None:
    poor = GameState(money=5_000)
    rich = GameState(money=30_000)

    assert (poor.min_tribute, poor.max_tribute) == (700, 1_000)
    assert (rich.min_tribute, rich.max_tribute) == (1_700, 2_500)


def test_home_reward_and_xp_threshold_scale_with_level() -> None:
    assert GameState(level=1).home_visit_reward == 200
    assert GameState(level=3).home_visit_reward == 280
    assert xp_required_for_level(2) == 120
    assert xp_required_for_level(4) == 160


def test_progress_ratios_are_clamped() -> None:
    assert GameState(xp=50).xp_progress == pytest.approx(0.5)
    assert GameState(xp=500).xp_progress == 1.0
    assert GameState(xp_to_next_level=0).xp_progress == 0.0
    assert GameState(hunger=25).hunger_percent == pytest.approx(0.25)


def test_inventory_totals() -> None:
    state = GameState(
        inventory=(
            InventoryItem(id="banana", name="Banana", price=15, quantity=2),
            InventoryItem(id="bread", name="Bread", price=20, quantity=3),
        )
    )

    assert state.total_inventory_items == 5
    assert state.has_inventory_items
    assert state.find_item("bread") is not None
    assert state.find_item("pizza_slice") is None


def test_json_uses_camel_case_keys_and_round_trips() -> None:
    state = GameState(
        money=4_200,
        family_broken=True,
        guess_game_count=2,
        inventory=(
            InventoryItem(
                id="pizza_slice", name="Slice Pizza", price=50, hungerRestore=30
            ),
        ),
    )

    payload = state.to_json()

    assert payload["money"] == 4_200
    assert payload["familyBroken"] is True
    assert payload["guessGameCount"] == 2
    assert payload["inventory"][0]["hungerRestore"] == 30
    assert GameState.from_json(payload) == state


def test_from_json_fills_missing_keys_with_defaults() -> None:
    state = GameState.from_json({"money": 777, "hp": None, "inventory": [{"id": "x"}]})

    assert state.money == 777
    assert state.hp == 100
    assert state.inventory[0].quantity == 1


def test_from_json_or_default_discards_garbage() -> None:
    assert GameState.from_json_or_default(None) == GameState()
    assert GameState.from_json_or_default({"level": "not-a-number"}) == GameState()
