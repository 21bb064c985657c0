"""Player-centric state container used by the game logic layer."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from casino_mafia_backend.game_logic.items import InventoryItem
from casino_mafia_backend.shared.enums import StreetJob
from casino_mafia_backend.shared.rounding import round_half_up

logger = logging.getLogger(__name__)

JOB_COUNTER_FIELDS: dict[StreetJob, str] = {
    StreetJob.MATH_QUIZ: "math_quiz_count",
    StreetJob.MATCH_SAMPLES: "match_samples_count",
    StreetJob.CODE_BREAKER: "code_breaker_count",
    StreetJob.GUESS_GAME: "guess_game_count",
}


def clamp(value: int, lower: int, upper: int) -> int:
    """Return *value* limited to the inclusive ``[lower, upper]`` range."""
    return max(lower, min(value, upper))


def xp_required_for_level(level: int) -> int:
    """Return the XP needed to leave *level* (grows 20% per level)."""
    return round_half_up(100 * (1 + 0.2 * (level - 1)))


class GameState(BaseModel):
    """Immutable snapshot of every attribute tracked for a player.

    Mutations always go through :class:`~casino_mafia_backend.game_logic.store.GameStore`
    which replaces the snapshot via ``model_copy``. Derived values that screens
    display (tribute range, XP progress, unlock eligibility) are exposed as
    read-only properties so every client computes them identically.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    MAX_JOB_ATTEMPTS: ClassVar[int] = 3
    BROKEN_FAMILY_MAX_HP: ClassVar[int] = 75
    MAFIA_ACTIVATION_MONEY: ClassVar[int] = 10_000
    BODYGUARD_UNLOCK_MONEY: ClassVar[int] = 50_000
    GANG_UNLOCK_MONEY: ClassVar[int] = 100_000
    BASE_HOME_REWARD: ClassVar[int] = 200
    BASE_TRIBUTE_MIN: ClassVar[int] = 700
    BASE_TRIBUTE_MAX: ClassVar[int] = 1_000

    money: int = 100
    hp: int = 100
    max_hp: int = 100
    hunger: int = 100
    max_hunger: int = 100
    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0)
    xp_to_next_level: int = Field(default=100, ge=0)
    bodyguards: int = Field(default=0, ge=0)
    gang_mates: int = Field(default=0, ge=0)
    family_happiness: int = 100
    max_family_happiness: int = 100
    hospital_cost: int = 1_500
    hospital_use_count: int = 0
    gang_unlocked: bool = False
    bodyguard_unlocked: bool = False
    family_broken: bool = False
    last_home_visit: int = 0
    last_casino_visit: int = 0
    home_visit_count: int = 0
    total_money_given_to_family: int = 0
    inventory: tuple[InventoryItem, ...] = Field(default_factory=tuple)
    math_quiz_count: int = 0
    match_samples_count: int = 0
    code_breaker_count: int = 0
    guess_game_count: int = 0

    # Street jobs

    def job_count(self, job: StreetJob) -> int:
        """Return how many paid completions *job* already has."""
        return getattr(self, JOB_COUNTER_FIELDS[job])

    def can_play(self, job: StreetJob) -> bool:
        """Return whether *job* still pays out."""
        return self.job_count(job) < self.MAX_JOB_ATTEMPTS

    def attempts_left(self, job: StreetJob) -> int:
        """Return the remaining paid completions for *job*."""
        return self.MAX_JOB_ATTEMPTS - self.job_count(job)

    # Derived stats

    @property
    def effective_max_hp(self) -> int:
        """Return the HP ceiling, lowered while the family is broken."""
        return self.BROKEN_FAMILY_MAX_HP if self.family_broken else self.max_hp

    @property
    def is_mafia_active(self) -> bool:
        return self.money > self.MAFIA_ACTIVATION_MONEY

    @property
    def can_unlock_bodyguards(self) -> bool:
        return self.money >= self.BODYGUARD_UNLOCK_MONEY

    @property
    def can_unlock_gang(self) -> bool:
        return self.money >= self.GANG_UNLOCK_MONEY

    @property
    def home_visit_reward(self) -> int:
        """Return the cash handed out by a home visit at the current level."""
        return round_half_up(self.BASE_HOME_REWARD * (1 + 0.2 * (self.level - 1)))

    @property
    def min_tribute(self) -> int:
        if self.money <= self.MAFIA_ACTIVATION_MONEY:
            return self.BASE_TRIBUTE_MIN
        excess = (self.money - self.MAFIA_ACTIVATION_MONEY) / 1_000
        return round_half_up(self.BASE_TRIBUTE_MIN + excess * 50)

    @property
    def max_tribute(self) -> int:
        if self.money <= self.MAFIA_ACTIVATION_MONEY:
            return self.BASE_TRIBUTE_MAX
        excess = (self.money - self.MAFIA_ACTIVATION_MONEY) / 1_000
        return round_half_up(self.BASE_TRIBUTE_MAX + excess * 75)

    @property
    def xp_progress(self) -> float:
        """Return progress towards the next level in ``[0.0, 1.0]``."""
        if self.xp_to_next_level <= 0:
            return 0.0
        return min(max(self.xp / self.xp_to_next_level, 0.0), 1.0)

    @property
    def hunger_percent(self) -> float:
        if self.max_hunger <= 0:
            return 0.0
        return min(max(self.hunger / self.max_hunger, 0.0), 1.0)

    @property
    def total_inventory_items(self) -> int:
        return sum(item.quantity for item in self.inventory)

    @property
    def has_inventory_items(self) -> bool:
        return bool(self.inventory)

    def find_item(self, item_id: str) -> InventoryItem | None:
        """Return the inventory stack for *item_id* if the player holds it."""
        return next((item for item in self.inventory if item.id_ == item_id), None)

    # Serialization

    def to_json(self) -> dict[str, Any]:
        """Return the storage representation using camelCase keys."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> GameState:
        """Rebuild a state from stored data; missing keys take their defaults."""
        cleaned = {key: value for key, value in data.items() if value is not None}
        raw_inventory = cleaned.pop("inventory", None) or []
        inventory = tuple(
            InventoryItem.from_json(entry)
            for entry in raw_inventory
            if isinstance(entry, dict)
        )
        return cls.model_validate({**cleaned, "inventory": inventory})

    @classmethod
    def from_json_or_default(cls, data: dict[str, Any] | None) -> GameState:
        """Like :meth:`from_json` but fall back to a fresh state on bad data."""
        if not data:
            return cls()
        try:
            return cls.from_json(data)
        except (ValidationError, TypeError, ValueError):
            logger.warning("Discarding unreadable stored game state.")
            return cls()


__all__ = [
    "JOB_COUNTER_FIELDS",
    "GameState",
    "clamp",
    "xp_required_for_level",
]
