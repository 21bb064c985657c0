"""Inventory items and the fixed market catalogue."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class InventoryItem(BaseModel):
    """Purchasable consumable that restores hunger when used.

    Two items compare equal when they share an ``id``; quantity and pricing
    do not take part in identity so a stack can be matched against its
    catalogue entry.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id_: str = Field(alias="id")
    name: str
    icon: str = "📦"
    price: int = Field(ge=0)
    hunger_restore: int = Field(default=0, ge=0, alias="hungerRestore")
    quantity: int = Field(default=1, ge=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InventoryItem):
            return NotImplemented
        return self.id_ == other.id_

    def __hash__(self) -> int:
        return hash(self.id_)

    def with_quantity(self, quantity: int) -> InventoryItem:
        """Return a copy of the item holding *quantity* units."""
        return self.model_copy(update={"quantity": quantity})

    def to_json(self) -> dict[str, Any]:
        """Return the storage representation using the legacy camelCase keys."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> InventoryItem:
        """Build an item from stored data, falling back to safe defaults."""
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            icon=data.get("icon") or "📦",
            price=data.get("price") or 0,
            hungerRestore=data.get("hungerRestore") or 0,
            quantity=data["quantity"] if data.get("quantity") is not None else 1,
        )


MARKET_ITEMS: tuple[InventoryItem, ...] = (
    InventoryItem(id="banana", name="Banana", icon="🍌", price=15, hungerRestore=10),
    InventoryItem(
        id="energy_drink", name="Energy Drink", icon="⚡", price=35, hungerRestore=25
    ),
    InventoryItem(id="bread", name="Bread", icon="🍞", price=20, hungerRestore=15),
    InventoryItem(
        id="pizza_slice", name="Slice Pizza", icon="🍕", price=50, hungerRestore=30
    ),
    InventoryItem(
        id="burger_menu", name="Burger Menu", icon="🍔", price=80, hungerRestore=50
    ),
)


def get_market_item(item_id: str) -> InventoryItem | None:
    """Return the catalogue entry for *item_id*, or ``None`` when unknown."""
    return next((item for item in MARKET_ITEMS if item.id_ == item_id), None)


__all__ = ["MARKET_ITEMS", "InventoryItem", "get_market_item"]
