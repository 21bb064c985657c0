"""Mafia extortion events.

Once a player holds more than the activation threshold the mafia may show up
and demand a tribute. The player either pays or fights; fighting costs gang
members when a gang is around and HP otherwise. Events are rate limited by a
cooldown and gated by a trigger roll.
"""

from __future__ import annotations

import logging
from uuid import uuid4

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.configuration import (
    RulesConfiguration,
    get_default_rules,
)
from casino_mafia_backend.game_logic.errors import RoundStateError
from casino_mafia_backend.game_logic.state import GameState, clamp
from casino_mafia_backend.game_logic.store import Clock, GameStore  # noqa: TC001
from casino_mafia_backend.shared.rng import CasinoRandomService
from casino_mafia_backend.shared.rounding import round_half_up

logger = logging.getLogger(__name__)

_BASE_FIGHT_DAMAGE = 20
_MAX_BASE_FIGHT_DAMAGE = 60
_FIGHT_DAMAGE_SPREAD = 11
_DAMAGE_PER_STEP = 5
_MONEY_PER_DAMAGE_STEP = 5_000


class MafiaEncounter(BaseModel):
    """Open tribute demand awaiting the player's answer."""

    model_config = ConfigDict(frozen=True)

    encounter_id: str = Field(default_factory=lambda: uuid4().hex)
    tribute: int = Field(..., ge=0)
    triggered_at_ms: int


class MafiaEventResult(BaseModel):
    """How an encounter ended."""

    model_config = ConfigDict(frozen=True)

    paid_tribute: bool
    money_lost: int = 0
    hp_lost: int = 0
    gang_lost: int = 0
    message: str


class MafiaEventService:
    """Roll for events and price their consequences."""

    def __init__(
        self,
        rng: CasinoRandomService | None = None,
        *,
        rules: RulesConfiguration | None = None,
        clock: Clock,
    ) -> None:
        self._rng = rng or CasinoRandomService()
        self._rules = rules or get_default_rules()
        self._clock = clock
        self._last_event_ms = 0

    @property
    def rules(self) -> RulesConfiguration:
        return self._rules

    @property
    def last_event_ms(self) -> int:
        return self._last_event_ms

    def cooldown_remaining_ms(self) -> int:
        cooldown_ms = self._rules.mafia_cooldown_seconds * 1000
        return max(cooldown_ms - (self._clock() - self._last_event_ms), 0)

    def should_trigger(self, state: GameState) -> bool:
        """Return whether an event fires: active, off cooldown and a lucky roll."""
        if not state.is_mafia_active:
            return False
        if self.cooldown_remaining_ms() > 0:
            return False
        return self._rng.next_double() < self._rules.mafia_trigger_probability

    def generate_tribute(self, state: GameState) -> int:
        """Return a uniform tribute between the state's minimum and maximum."""
        low, high = state.min_tribute, state.max_tribute
        return low + self._rng.next_int(high - low + 1)

    def calculate_fight_damage(self, state: GameState) -> int:
        """Return the raw hit, growing with wealth, before bodyguards."""
        scaled = _BASE_FIGHT_DAMAGE + round_half_up(
            (state.money - GameState.MAFIA_ACTIVATION_MONEY)
            / _MONEY_PER_DAMAGE_STEP
            * _DAMAGE_PER_STEP
        )
        base = clamp(scaled, _BASE_FIGHT_DAMAGE, _MAX_BASE_FIGHT_DAMAGE)
        return base + self._rng.next_int(_FIGHT_DAMAGE_SPREAD)

    def calculate_gang_loss(self, state: GameState) -> int:
        max_loss = clamp(state.gang_mates, 1, self._rules.max_gang_loss_per_hit)
        return 1 + self._rng.next_int(max_loss)

    def mark_triggered(self) -> int:
        self._last_event_ms = self._clock()
        return self._last_event_ms

    def reset_cooldown(self) -> None:
        self._last_event_ms = 0


class MafiaEventManager:
    """Track the open encounter for one player and resolve it on their store."""

    def __init__(self, store: GameStore, service: MafiaEventService) -> None:
        self._store = store
        self._service = service
        self._encounter: MafiaEncounter | None = None

    @property
    def encounter(self) -> MafiaEncounter | None:
        return self._encounter

    @property
    def service(self) -> MafiaEventService:
        return self._service

    def _open(self) -> MafiaEncounter:
        triggered_at = self._service.mark_triggered()
        self._encounter = MafiaEncounter(
            tribute=self._service.generate_tribute(self._store.state),
            triggered_at_ms=triggered_at,
        )
        logger.info(
            "Mafia demands $%s from player %s.",
            self._encounter.tribute,
            self._store.player_id,
        )
        return self._encounter

    def check_and_trigger(self) -> MafiaEncounter | None:
        """Roll for an event; an already open encounter is returned as is."""
        if self._encounter is not None:
            return self._encounter
        if not self._service.should_trigger(self._store.state):
            return None
        return self._open()

    def force_trigger(self) -> MafiaEncounter | None:
        """Open an encounter regardless of cooldown, provided the mafia is active."""
        if not self._store.state.is_mafia_active:
            return None
        return self._open()

    def _require_encounter(self) -> MafiaEncounter:
        if self._encounter is None:
            msg = "There is no mafia encounter to resolve."
            raise RoundStateError(msg)
        return self._encounter

    def pay_tribute(self) -> MafiaEventResult:
        """Hand over the tribute; the encounter closes even if it is unaffordable."""
        encounter = self._require_encounter()
        self._encounter = None
        if not self._store.spend_money(encounter.tribute):
            logger.info(
                "Player %s could not afford the $%s tribute.",
                self._store.player_id,
                encounter.tribute,
            )
            return MafiaEventResult(
                paid_tribute=False,
                message=(
                    f"You could not pay the ${encounter.tribute} tribute. "
                    "The mafia leaves empty-handed... for now."
                ),
            )
        logger.info(
            "Player %s paid a $%s tribute.", self._store.player_id, encounter.tribute
        )
        return MafiaEventResult(
            paid_tribute=True,
            money_lost=encounter.tribute,
            message=(
                f"You paid ${encounter.tribute} to the mafia. "
                "They leave you alone... for now."
            ),
        )

    def fight(self) -> MafiaEventResult:
        """Fight back with the gang if there is one, otherwise in person."""
        self._require_encounter()
        self._encounter = None
        state = self._store.state
        rules = self._service.rules
        if state.gang_mates > 0:
            gang_lost = self._service.calculate_gang_loss(state)
            self._store.remove_gang_mates(gang_lost)
            plural = "s" if gang_lost > 1 else ""
            logger.info(
                "Player %s lost %s gang members fighting.",
                self._store.player_id,
                gang_lost,
            )
            return MafiaEventResult(
                paid_tribute=False,
                gang_lost=gang_lost,
                message=(
                    f"Your gang fought off the mafia! "
                    f"You lost {gang_lost} gang member{plural}."
                ),
            )

        base_damage = self._service.calculate_fight_damage(state)
        reduced = base_damage - state.bodyguards * rules.bodyguard_damage_reduction
        hp_lost = clamp(reduced, rules.mafia_min_fight_damage, base_damage)
        self._store.update_hp(-hp_lost)
        message = f"You fought the mafia and took {hp_lost} damage!"
        if state.bodyguards > 0:
            message += " Your bodyguards reduced the damage."
        logger.info("Player %s took %s damage fighting.", self._store.player_id, hp_lost)
        return MafiaEventResult(paid_tribute=False, hp_lost=hp_lost, message=message)

    def dismiss(self) -> None:
        self._encounter = None

    def reset_cooldown(self) -> None:
        self._service.reset_cooldown()


__all__ = [
    "MafiaEncounter",
    "MafiaEventManager",
    "MafiaEventResult",
    "MafiaEventService",
]
