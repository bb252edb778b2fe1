"""Action definition models.

Two closed families of actions attached to items:

- Active actions are triggered manually: Buy, Sell, Construct, Deconstruct.
- Passive actions fire once per day tick: Produce, Reduce.

Plus the item-independent global actions (Pass Day).

Each variant is a frozen dataclass carrying only its own parameters. All
behaviour lives in ``hundred_days.engine.activation``, which dispatches
over the variants exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from hundred_days.util.types import format_listing


# -- Active --------------------------------------------------------------

@dataclass(frozen=True)
class Buy:
    """Trade currency for units of the owning item."""
    buy_price: int


@dataclass(frozen=True)
class Sell:
    """Trade units of the owning item for currency."""
    sell_price: int


@dataclass(frozen=True)
class Construct:
    """Consume other items to create units of the owning item.

    Attributes:
        build_cost: Units consumed per constructed unit. {item_name: amount}
    """
    build_cost: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Deconstruct:
    """Remove units of the owning item and recoup other items.

    Attributes:
        item_gain: Units gained per deconstructed unit. {item_name: amount}
    """
    item_gain: dict[str, int] = field(default_factory=dict)


# -- Passive -------------------------------------------------------------

@dataclass(frozen=True)
class Produce:
    """Add to other items every day. {item_name: amount per day}"""
    item_production: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Reduce:
    """Take from other items every day. {item_name: amount per day}"""
    item_reduction: dict[str, int] = field(default_factory=dict)


ActiveAction = Union[Buy, Sell, Construct, Deconstruct]
PassiveAction = Union[Produce, Reduce]
Action = Union[Buy, Sell, Construct, Deconstruct, Produce, Reduce]

# Tags used by the data document ({Buy: {buy_price: 5}}).
ACTIVE_TYPES: dict[str, type] = {
    "Buy": Buy,
    "Sell": Sell,
    "Construct": Construct,
    "Deconstruct": Deconstruct,
}
PASSIVE_TYPES: dict[str, type] = {
    "Produce": Produce,
    "Reduce": Reduce,
}

LIQUIDATION_TYPES = (Sell, Deconstruct)


# -- Global --------------------------------------------------------------

class GlobalAction(Enum):
    """Actions that are not bound to an item."""

    PASS_DAY = "PassDay"

    @property
    def label(self) -> str:
        if self is GlobalAction.PASS_DAY:
            return "Pass Day"
        raise TypeError(f"Unhandled global action: {self!r}")


# -- Information ---------------------------------------------------------

def action_name(action: Action) -> str:
    """Return the display name of an action variant."""
    if isinstance(action, Buy):
        return "Buy"
    if isinstance(action, Sell):
        return "Sell"
    if isinstance(action, Construct):
        return "Construct"
    if isinstance(action, Deconstruct):
        return "Deconstruct"
    if isinstance(action, Produce):
        return "Produce"
    if isinstance(action, Reduce):
        return "Reduce"
    raise TypeError(f"Not an action: {action!r}")


def describe_action(action: Action) -> str:
    """Return the multi-line description shown in the item panel."""
    if isinstance(action, Buy):
        return f"Buy Price: {action.buy_price}"
    if isinstance(action, Sell):
        return f"Sell Price: {action.sell_price}"
    if isinstance(action, Construct):
        return f"Construction Cost:\n{format_listing(action.build_cost)}"
    if isinstance(action, Deconstruct):
        return f"Deconstruction Recouperation:\n{format_listing(action.item_gain)}"
    if isinstance(action, Produce):
        return f"Produces daily:\n{format_listing(action.item_production)}"
    if isinstance(action, Reduce):
        return f"Reduces daily:\n{format_listing(action.item_reduction)}"
    raise TypeError(f"Not an action: {action!r}")


def referenced_items(action: Action) -> dict[str, int]:
    """Return the other items an action reads or writes, with per-unit amounts.

    Buy and Sell only touch the owning item and the wallet.
    """
    if isinstance(action, (Buy, Sell)):
        return {}
    if isinstance(action, Construct):
        return dict(action.build_cost)
    if isinstance(action, Deconstruct):
        return dict(action.item_gain)
    if isinstance(action, Produce):
        return dict(action.item_production)
    if isinstance(action, Reduce):
        return dict(action.item_reduction)
    raise TypeError(f"Not an action: {action!r}")
