"""Pydantic models for player, market and building endpoints.

Game state is returned in its persisted camelCase shape; every other field
uses snake_case like the auth endpoints.
"""

# ruff: noqa: TC001

from __future__ import annotations

from pydantic import BaseModel

from casino_mafia_backend.game_logic import GameState, InventoryItem
from casino_mafia_backend.shared import ActivityEvent, StreetJob


class PlayerStateResponse(BaseModel):
    """Current snapshot of the player's game."""

    state: GameState


class JobAttempts(BaseModel):
    job: StreetJob
    completed: int
    attempts_left: int


class PlayerStatsResponse(BaseModel):
    """Values derived from the state that clients display but never store."""

    effective_max_hp: int
    is_mafia_active: bool
    can_unlock_bodyguards: bool
    can_unlock_gang: bool
    home_visit_reward: int
    min_tribute: int
    max_tribute: int
    xp_progress: float
    hunger_percent: float
    total_inventory_items: int
    has_inventory_items: bool
    suggested_donation: int
    jobs: list[JobAttempts]

    @classmethod
    def from_state(cls, state: GameState, suggested_donation: int) -> PlayerStatsResponse:
        return cls(
            effective_max_hp=state.effective_max_hp,
            is_mafia_active=state.is_mafia_active,
            can_unlock_bodyguards=state.can_unlock_bodyguards,
            can_unlock_gang=state.can_unlock_gang,
            home_visit_reward=state.home_visit_reward,
            min_tribute=state.min_tribute,
            max_tribute=state.max_tribute,
            xp_progress=state.xp_progress,
            hunger_percent=state.hunger_percent,
            total_inventory_items=state.total_inventory_items,
            has_inventory_items=state.has_inventory_items,
            suggested_donation=suggested_donation,
            jobs=[
                JobAttempts(
                    job=job,
                    completed=state.job_count(job),
                    attempts_left=state.attempts_left(job),
                )
                for job in StreetJob
            ],
        )


class ActivityResponse(BaseModel):
    events: list[ActivityEvent]


class MarketResponse(BaseModel):
    """Items for sale, in catalogue order."""

    items: list[InventoryItem]


class InventoryResponse(BaseModel):
    items: list[InventoryItem]
    total_items: int


class UseItemResponse(BaseModel):
    item_id: str
    hunger_restored: int
    state: GameState


class HomeVisitResponse(BaseModel):
    reward: int
    state: GameState


class DonationRequest(BaseModel):
    """Money to leave for the family; non-positive amounts are rejected."""

    amount: int


class SuggestedDonationResponse(BaseModel):
    amount: int


class HospitalResponse(BaseModel):
    price_paid: int
    state: GameState


class RecruitRequest(BaseModel):
    count: int = 1


__all__ = [
    "ActivityResponse",
    "DonationRequest",
    "HomeVisitResponse",
    "HospitalResponse",
    "InventoryResponse",
    "JobAttempts",
    "MarketResponse",
    "PlayerStateResponse",
    "PlayerStatsResponse",
    "RecruitRequest",
    "SuggestedDonationResponse",
    "UseItemResponse",
]
