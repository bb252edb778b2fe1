"""Item models.

An item is any quantity-tracked object the player can own: raw resources
as well as buildings. Loaded from the data document via the item_loader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hundred_days.models.actions import (
    LIQUIDATION_TYPES,
    ActiveAction,
    PassiveAction,
    describe_action,
)


class ItemCategory(Enum):
    """Display grouping of an item. Has no effect on the engine."""

    RESOURCE = "Resource"
    BUILDING = "Building"


@dataclass
class Item:
    """A named item and the amount the player owns.

    Attributes:
        name: Unique item name, also the registry key.
        amount: Units owned. Signed; engine actions keep it >= 0.
        category: Resource or Building.
        industries: Industry tags used for filtering in the view layer.
        active_actions: Manually triggered actions, in display order.
        passive_actions: Actions fired on every day pass.
    """

    name: str
    amount: int = 0
    category: ItemCategory = ItemCategory.RESOURCE
    industries: list[str] = field(default_factory=list)
    active_actions: list[ActiveAction] = field(default_factory=list)
    passive_actions: list[PassiveAction] = field(default_factory=list)

    def liquidation_action(self) -> ActiveAction | None:
        """First Sell or Deconstruct action, used when valuing the item."""
        for action in self.active_actions:
            if isinstance(action, LIQUIDATION_TYPES):
                return action
        return None

    def information(self) -> str:
        """Render the item panel text: name, amount, industries, actions."""
        industries = "".join(f"\n{tag}" for tag in self.industries)
        actions = "".join(
            f"{describe_action(a)}\n"
            for a in [*self.active_actions, *self.passive_actions]
        )
        return f"Name: {self.name}\nAmount: {self.amount}\nIndustries: {industries}\n\n{actions}"
