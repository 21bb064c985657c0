"""Authoritative per-player game state store.

The store owns the single mutable reference to a player's
:class:`~casino_mafia_backend.game_logic.state.GameState`. Each public
operation replaces the immutable snapshot, persists it through the injected
:class:`~casino_mafia_backend.game_logic.persistence.GameStateStore` and then
notifies subscribers. Operations keep boolean results for attempted actions
and integer results for rewards; callers decide how to report a refusal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from casino_mafia_backend.game_logic.configuration import (
    RulesConfiguration,
    get_default_rules,
)
from casino_mafia_backend.game_logic.items import InventoryItem  # noqa: TC001
from casino_mafia_backend.game_logic.persistence import GameStateStore  # noqa: TC001
from casino_mafia_backend.game_logic.state import (
    JOB_COUNTER_FIELDS,
    GameState,
    clamp,
    xp_required_for_level,
)
from casino_mafia_backend.shared.enums import StreetJob
from casino_mafia_backend.shared.rounding import round_half_up

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]
Clock = Callable[[], int]

_MAX_GANG_SIZE = 999


def _now_ms() -> int:
    return int(datetime.now(tz=UTC).timestamp() * 1000)


class GameStore:
    """Mutate, persist and broadcast one player's game state."""

    def __init__(
        self,
        player_id: str,
        state_store: GameStateStore,
        *,
        state: GameState | None = None,
        rules: RulesConfiguration | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._player_id = player_id
        self._state_store = state_store
        self._state = state or GameState()
        self._rules = rules or get_default_rules()
        self._clock = clock or _now_ms
        self._listeners: list[StateListener] = []

    @classmethod
    def load(
        cls,
        player_id: str,
        state_store: GameStateStore,
        *,
        rules: RulesConfiguration | None = None,
        clock: Clock | None = None,
    ) -> GameStore:
        """Build a store seeded from persisted state, or the defaults."""
        try:
            stored = state_store.load_state(player_id)
        except Exception:
            logger.exception("Failed to load game state for player %s.", player_id)
            stored = None
        return cls(player_id, state_store, state=stored, rules=rules, clock=clock)

    @property
    def player_id(self) -> str:
        return self._player_id

    @property
    def state(self) -> GameState:
        """Return the current immutable snapshot."""
        return self._state

    @property
    def rules(self) -> RulesConfiguration:
        return self._rules

    def now_ms(self) -> int:
        """Return the store clock reading in epoch milliseconds."""
        return self._clock()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* for state changes and return an unsubscribe hook."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # Internal plumbing

    def _apply(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)

    def _commit(self) -> None:
        try:
            self._state_store.save_state(self._player_id, self._state)
        except Exception:
            logger.exception("Failed to persist game state for %s.", self._player_id)
        for listener in tuple(self._listeners):
            listener(self._state)

    def _cap_money(self, amount: int) -> int:
        return clamp(amount, 0, self._rules.money_cap)

    def _check_unlocks(self) -> None:
        state = self._state
        bodyguard_unlocked = state.bodyguard_unlocked or state.can_unlock_bodyguards
        gang_unlocked = state.gang_unlocked or state.can_unlock_gang
        if (bodyguard_unlocked, gang_unlocked) != (
            state.bodyguard_unlocked,
            state.gang_unlocked,
        ):
            logger.info(
                "Player %s unlocked buildings (bodyguards=%s, gang=%s).",
                self._player_id,
                bodyguard_unlocked,
                gang_unlocked,
            )
            self._apply(
                bodyguard_unlocked=bodyguard_unlocked, gang_unlocked=gang_unlocked
            )

    def _shift_happiness(self, delta: int) -> None:
        state = self._state
        happiness = clamp(
            state.family_happiness + delta, 0, state.max_family_happiness
        )
        broken = state.family_broken
        if happiness == 0 and not broken:
            logger.info("Family of player %s is broken.", self._player_id)
            broken = True
        elif happiness > 0 and broken:
            broken = False
        self._apply(family_happiness=happiness, family_broken=broken)

    def _credit(self, amount: int) -> None:
        self._apply(money=self._cap_money(self._state.money + amount))
        self._check_unlocks()

    # Money

    def add_money(self, amount: int) -> None:
        """Credit *amount*; non-positive amounts are ignored."""
        if amount <= 0:
            return
        self._credit(amount)
        logger.debug("Player %s earned $%s.", self._player_id, amount)
        self._commit()

    def spend_money(self, amount: int) -> bool:
        """Debit *amount* when affordable; spending nothing always succeeds."""
        if amount <= 0:
            return True
        if self._state.money < amount:
            logger.info(
                "Player %s cannot spend $%s (has $%s).",
                self._player_id,
                amount,
                self._state.money,
            )
            return False
        self._apply(money=self._state.money - amount)
        logger.debug("Player %s spent $%s.", self._player_id, amount)
        self._commit()
        return True

    def update_money(self, delta: int) -> None:
        self._credit(delta)
        self._commit()

    def set_money(self, amount: int) -> None:
        self._apply(money=self._cap_money(amount))
        self._check_unlocks()
        self._commit()

    # HP

    def take_damage(self, damage: int) -> None:
        """Apply an incoming hit.

        Gang members soak the whole hit and the player loses a few of them.
        Without a gang each bodyguard shaves a fixed amount off the damage,
        though at least one point always lands.
        """
        if damage <= 0:
            return
        state = self._state
        if state.gang_mates > 0:
            gang_loss = clamp(1 + damage // 10, 1, self._rules.max_gang_loss_per_hit)
            self._apply(gang_mates=clamp(state.gang_mates - gang_loss, 0, _MAX_GANG_SIZE))
            logger.debug("Player %s lost %s gang members.", self._player_id, gang_loss)
            self._commit()
            return

        reduced = damage - state.bodyguards * self._rules.bodyguard_damage_reduction
        actual = clamp(reduced, 1, damage)
        self._apply(hp=clamp(state.hp - actual, 0, state.effective_max_hp))
        self._shift_happiness(-self._rules.damage_happiness_penalty)
        logger.debug("Player %s took %s damage.", self._player_id, actual)
        self._commit()

    def heal(self, amount: int) -> None:
        if amount <= 0:
            return
        state = self._state
        self._apply(hp=clamp(state.hp + amount, 0, state.effective_max_hp))
        self._commit()

    def heal_to_full(self) -> bool:
        """Pay the hospital to restore full HP; the price rises after each use."""
        state = self._state
        if state.hp >= state.effective_max_hp or state.money < state.hospital_cost:
            return False
        self._apply(
            hp=state.effective_max_hp,
            money=state.money - state.hospital_cost,
            hospital_cost=state.hospital_cost + self._rules.hospital_cost_increase,
            hospital_use_count=state.hospital_use_count + 1,
        )
        logger.info(
            "Player %s healed at the hospital for $%s.",
            self._player_id,
            state.hospital_cost,
        )
        self._commit()
        return True

    def update_hp(self, delta: int) -> None:
        """Shift HP by *delta*; any loss also upsets the family."""
        state = self._state
        self._apply(hp=clamp(state.hp + delta, 0, state.effective_max_hp))
        if delta < 0:
            self._shift_happiness(-self._rules.damage_happiness_penalty)
        self._commit()

    # Hunger

    def reduce_hunger(self, amount: int) -> None:
        if amount <= 0:
            return
        self.update_hunger(-amount)

    def restore_hunger(self, amount: int) -> None:
        if amount <= 0:
            return
        self.update_hunger(amount)

    def update_hunger(self, delta: int) -> None:
        state = self._state
        self._apply(hunger=clamp(state.hunger + delta, 0, state.max_hunger))
        self._commit()

    # XP and level

    def increase_xp(self, amount: int) -> None:
        """Add XP, levelling up as many times as the total allows."""
        if amount <= 0:
            return
        xp = self._state.xp + amount
        level = self._state.level
        xp_to_next = self._state.xp_to_next_level
        while xp_to_next > 0 and xp >= xp_to_next:
            xp -= xp_to_next
            level += 1
            xp_to_next = xp_required_for_level(level)
        if level != self._state.level:
            logger.info("Player %s reached level %s.", self._player_id, level)
        self._apply(xp=xp, level=level, xp_to_next_level=xp_to_next)
        self._commit()

    def level_up(self) -> None:
        level = self._state.level + 1
        self._apply(level=level, xp=0, xp_to_next_level=xp_required_for_level(level))
        self._commit()

    # Family

    def update_family_happiness(self, delta: int) -> None:
        """Shift happiness; the family breaks at zero and mends above it."""
        self._shift_happiness(delta)
        self._commit()

    def restore_family(self) -> None:
        if self._state.family_happiness > 0:
            self._apply(family_broken=False)
            self._commit()

    def apply_casino_time_penalty(self) -> None:
        self._shift_happiness(-self._rules.casino_time_penalty)
        self._apply(last_casino_visit=self._clock())
        self._commit()

    def apply_home_absence_penalty(self) -> None:
        self.update_family_happiness(-self._rules.home_absence_penalty)

    def enter_casino(self) -> None:
        self._apply(last_casino_visit=self._clock())
        self._commit()

    # Home

    def visit_home(self) -> int:
        """Collect the home reward and cheer the family up; returns the reward."""
        state = self._state
        reward = state.home_visit_reward
        self._apply(
            money=self._cap_money(state.money + reward),
            last_home_visit=self._clock(),
            home_visit_count=state.home_visit_count + 1,
        )
        self._shift_happiness(clamp(10 + state.level, 10, 25))
        self._check_unlocks()
        self._commit()
        return reward

    def leave_money_for_family(self, amount: int) -> bool:
        """Donate *amount*; each full step buys a fixed amount of happiness."""
        state = self._state
        if amount <= 0 or state.money < amount:
            return False
        rules = self._rules
        gain = (amount // rules.donation_step) * rules.donation_happiness_per_step
        self._apply(
            money=state.money - amount,
            total_money_given_to_family=state.total_money_given_to_family + amount,
        )
        self._shift_happiness(gain)
        self._commit()
        return True

    def suggested_donation(self) -> int:
        """Return a donation that would restore about half the happiness deficit."""
        state = self._state
        rules = self._rules
        deficit = state.max_family_happiness - state.family_happiness
        steps = 0.0
        if rules.donation_happiness_per_step:
            steps = deficit / rules.donation_happiness_per_step
        return clamp(
            round_half_up(steps * rules.donation_step / 2),
            rules.min_suggested_donation,
            rules.max_suggested_donation,
        )

    # Bodyguards and gang

    def add_bodyguard(self) -> bool:
        state = self._state
        rules = self._rules
        if state.bodyguards >= rules.max_bodyguards:
            return False
        if state.money < rules.bodyguard_cost:
            return False
        self._apply(
            bodyguards=state.bodyguards + 1, money=state.money - rules.bodyguard_cost
        )
        logger.info("Player %s hired a bodyguard.", self._player_id)
        self._commit()
        return True

    def add_gang_mates(self, count: int) -> None:
        self._apply(gang_mates=clamp(self._state.gang_mates + count, 0, _MAX_GANG_SIZE))
        self._commit()

    def recruit_gang_members(self, count: int, cost: int) -> bool:
        """Hire *count* members for a total of *cost*."""
        state = self._state
        if state.money < cost or count <= 0:
            return False
        self._apply(gang_mates=state.gang_mates + count, money=state.money - cost)
        logger.info("Player %s recruited %s gang members.", self._player_id, count)
        self._commit()
        return True

    def remove_gang_mates(self, count: int) -> None:
        self._apply(gang_mates=clamp(self._state.gang_mates - count, 0, _MAX_GANG_SIZE))
        self._commit()

    # Inventory

    def buy_item(self, item: InventoryItem) -> bool:
        """Buy one unit of *item*, stacking it onto an existing entry."""
        state = self._state
        if state.money < item.price:
            return False
        existing = state.find_item(item.id_)
        if existing is None:
            inventory = (*state.inventory, item.with_quantity(1))
        else:
            inventory = tuple(
                entry.with_quantity(entry.quantity + 1) if entry.id_ == item.id_ else entry
                for entry in state.inventory
            )
        self._apply(money=state.money - item.price, inventory=inventory)
        logger.debug("Player %s bought %s.", self._player_id, item.id_)
        self._commit()
        return True

    def use_item(self, item: InventoryItem) -> int:
        """Consume one unit of *item* and return the hunger it restored.

        A full stomach still consumes the item; the nominal restore value is
        reported in that case. Returns ``0`` when the item is not held.
        """
        state = self._state
        existing = state.find_item(item.id_)
        if existing is None or existing.quantity <= 0:
            return 0
        if existing.quantity == 1:
            inventory = tuple(entry for entry in state.inventory if entry.id_ != item.id_)
        else:
            inventory = tuple(
                entry.with_quantity(entry.quantity - 1) if entry.id_ == item.id_ else entry
                for entry in state.inventory
            )
        actual = clamp(item.hunger_restore, 0, state.max_hunger - state.hunger)
        self._apply(
            hunger=clamp(state.hunger + item.hunger_restore, 0, state.max_hunger),
            inventory=inventory,
        )
        logger.debug("Player %s used %s.", self._player_id, item.id_)
        self._commit()
        return actual if actual > 0 else item.hunger_restore

    # Street jobs

    def _complete_job(self, job: StreetJob, reward: int) -> int:
        state = self._state
        if not state.can_play(job):
            logger.info("Player %s has no paid %s attempts left.", self._player_id, job)
            return 0
        counter = JOB_COUNTER_FIELDS[job]
        self._apply(
            **{counter: getattr(state, counter) + 1},
            money=self._cap_money(state.money + reward),
        )
        self._check_unlocks()
        self._commit()
        return reward

    def complete_math_quiz(self, correct_answers: int) -> int:
        reward = max(correct_answers, 0) * self._rules.math_quiz_reward_per_question
        return self._complete_job(StreetJob.MATH_QUIZ, reward)

    def complete_match_samples(self) -> int:
        return self._complete_job(
            StreetJob.MATCH_SAMPLES, self._rules.match_samples_reward
        )

    def complete_code_breaker(self) -> int:
        return self._complete_job(StreetJob.CODE_BREAKER, self._rules.code_breaker_reward)

    def complete_guess_game(self) -> int:
        return self._complete_job(StreetJob.GUESS_GAME, self._rules.guess_game_reward)

    def reset_game(self) -> None:
        """Throw away all progress and start from the default state."""
        logger.info("Resetting game for player %s.", self._player_id)
        self._state = GameState()
        self._commit()


__all__ = ["Clock", "GameStore", "StateListener"]
