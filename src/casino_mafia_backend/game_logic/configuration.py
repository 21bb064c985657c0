"""Game rule and casino odds configuration objects."""

from __future__ import annotations

from functools import cache

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class RulesConfiguration(BaseModel):
    """Immutable representation of the life-simulation economy rules."""

    model_config = ConfigDict(frozen=True)

    money_cap: int = Field(ge=0)
    bodyguard_cost: int = Field(ge=0)
    max_bodyguards: int = Field(ge=0)
    bodyguard_damage_reduction: int = Field(ge=0)
    gang_recruit_cost: int = Field(ge=0)
    max_gang_loss_per_hit: int = Field(ge=1)
    hospital_cost_increase: int = Field(ge=0)
    damage_happiness_penalty: int = Field(ge=0)
    casino_time_penalty: int = Field(ge=0)
    home_absence_penalty: int = Field(ge=0)
    donation_step: int = Field(ge=1)
    donation_happiness_per_step: int = Field(ge=0)
    min_suggested_donation: int = Field(ge=0)
    max_suggested_donation: int = Field(ge=0)
    math_quiz_reward_per_question: int = Field(ge=0)
    match_samples_reward: int = Field(ge=0)
    code_breaker_reward: int = Field(ge=0)
    guess_game_reward: int = Field(ge=0)
    mafia_trigger_probability: float = Field(ge=0, le=1)
    mafia_cooldown_seconds: int = Field(ge=0)
    mafia_min_fight_damage: int = Field(ge=0)


class GameRules(BaseSettings):
    """Load default game rules from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CASINO_MAFIA_RULES_",
        extra="ignore",
    )

    money_cap: int = Field(default=999_999_999, ge=0)
    bodyguard_cost: int = Field(default=5_000, ge=0)
    max_bodyguards: int = Field(default=10, ge=0)
    bodyguard_damage_reduction: int = Field(default=5, ge=0)
    gang_recruit_cost: int = Field(default=2_000, ge=0)
    max_gang_loss_per_hit: int = Field(default=5, ge=1)
    hospital_cost_increase: int = Field(default=1_000, ge=0)
    damage_happiness_penalty: int = Field(default=5, ge=0)
    casino_time_penalty: int = Field(default=5, ge=0)
    home_absence_penalty: int = Field(default=10, ge=0)
    donation_step: int = Field(default=100, ge=1)
    donation_happiness_per_step: int = Field(default=5, ge=0)
    min_suggested_donation: int = Field(default=100, ge=0)
    max_suggested_donation: int = Field(default=5_000, ge=0)
    math_quiz_reward_per_question: int = Field(default=10, ge=0)
    match_samples_reward: int = Field(default=50, ge=0)
    code_breaker_reward: int = Field(default=30, ge=0)
    guess_game_reward: int = Field(default=20, ge=0)
    mafia_trigger_probability: float = Field(default=0.30, ge=0, le=1)
    mafia_cooldown_seconds: int = Field(default=5 * 60, ge=0)
    mafia_min_fight_damage: int = Field(default=5, ge=0)

    def to_config(self) -> RulesConfiguration:
        """Convert defaults into an immutable configuration object."""
        return RulesConfiguration(**self.model_dump())


class OddsConfiguration(BaseModel):
    """Immutable per-game odds and house edges."""

    model_config = ConfigDict(frozen=True)

    bet_presets: tuple[int, ...]
    coin_flip_house_edge: float = Field(ge=0, lt=1)
    horse_race_house_edge: float = Field(ge=0, lt=1)
    aviator_house_edge: float = Field(ge=0, lt=1)
    aviator_growth_rate: float = Field(gt=0)
    aviator_max_display_multiplier: float = Field(ge=1)
    slot_target_rtp: float = Field(gt=0)
    blackjack_decks: int = Field(ge=1)
    blackjack_natural_payout: float = Field(ge=0)
    blackjack_dealer_stands_on_soft_17: bool
    blackjack_theoretical_rtp: float = Field(gt=0)
    simulation_tolerance: float = Field(gt=0)


class CasinoOdds(BaseSettings):
    """Load casino odds from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CASINO_MAFIA_ODDS_",
        extra="ignore",
    )

    bet_presets: tuple[int, ...] = (50, 100, 250, 500, 1_000)
    coin_flip_house_edge: float = Field(default=0.02, ge=0, lt=1)
    horse_race_house_edge: float = Field(default=0.10, ge=0, lt=1)
    aviator_house_edge: float = Field(default=0.04, ge=0, lt=1)
    aviator_growth_rate: float = Field(default=0.06, gt=0)
    aviator_max_display_multiplier: float = Field(default=100.0, ge=1)
    slot_target_rtp: float = Field(default=0.95, gt=0)
    blackjack_decks: int = Field(default=6, ge=1)
    blackjack_natural_payout: float = Field(default=1.5, ge=0)
    blackjack_dealer_stands_on_soft_17: bool = True
    blackjack_theoretical_rtp: float = Field(default=0.995, gt=0)
    simulation_tolerance: float = Field(default=0.02, gt=0)

    def to_config(self) -> OddsConfiguration:
        """Convert defaults into an immutable configuration object."""
        return OddsConfiguration(**self.model_dump())


@cache
def get_default_rules() -> RulesConfiguration:
    """Return the cached default rule configuration."""
    return GameRules().to_config()


@cache
def get_default_odds() -> OddsConfiguration:
    """Return the cached default odds configuration."""
    return CasinoOdds().to_config()


__all__ = [
    "CasinoOdds",
    "GameRules",
    "OddsConfiguration",
    "RulesConfiguration",
    "get_default_odds",
    "get_default_rules",
]
