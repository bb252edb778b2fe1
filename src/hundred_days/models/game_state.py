"""Game state model: the player's complete economic state.

Holds the wallet, the remaining day count and the item registry. Built
once by the state_loader and mutated in place afterwards; only amounts
and currency change, never the set of items.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Iterator

from hundred_days.engine.errors import ItemNotFound
from hundred_days.models.actions import GlobalAction
from hundred_days.models.items import Item, ItemCategory


@dataclass
class GameState:
    """Complete state of a running game.

    Attributes:
        day: Remaining days. Decremented by day passes; the game has
            ended once it drops below zero.
        currency: Wallet balance.
        items: Item registry {name: Item}.
        industries: Industry tags declared by the data document.
        global_actions: Item-independent actions offered to the player.
        starting_day: Day count at load time.
    """

    day: int = 0
    currency: int = 0
    items: dict[str, Item] = field(default_factory=dict)
    industries: list[str] = field(default_factory=list)
    global_actions: list[GlobalAction] = field(default_factory=list)
    starting_day: int = 0

    # -- Registry --------------------------------------------------------

    def get_item(self, name: str) -> Item:
        """Look up an item by name. Raises ItemNotFound."""
        try:
            return self.items[name]
        except KeyError:
            raise ItemNotFound(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items.values())

    def items_by_category(self, category: ItemCategory) -> list[Item]:
        """All items of one category, in registry order."""
        return [i for i in self.items.values() if i.category == category]

    def items_in_industry(self, industry: str) -> list[Item]:
        """All items tagged with an industry."""
        return [i for i in self.items.values() if industry in i.industries]

    # -- Lifecycle -------------------------------------------------------

    @property
    def is_ended(self) -> bool:
        return self.day < 0

    @property
    def days_elapsed(self) -> int:
        return self.starting_day - self.day

    def clone(self) -> GameState:
        """Deep, fully independent copy for scratch simulations."""
        return copy.deepcopy(self)
