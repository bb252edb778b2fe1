"""Activation engine: what an action can do and what it does.

Two entry points per action variant:

- ``max_activate`` returns the largest multiplier the current state can
  afford (never negative).
- ``activate`` applies the action at the requested multiplier and returns
  a result message. It is all-or-nothing: every referenced item is
  resolved and affordability confirmed before the first mutation, so a
  failure raises an EngineError with the state untouched.

Day passes use ``activate_passive``, which clamps reductions at zero
instead of rejecting them.
"""

from __future__ import annotations

import logging
from typing import Mapping

from hundred_days.engine.errors import (
    InsufficientCurrency,
    InsufficientResources,
    InvalidMultiplier,
)
from hundred_days.models.actions import (
    Action,
    Buy,
    Construct,
    Deconstruct,
    PassiveAction,
    Produce,
    Reduce,
    Sell,
    referenced_items,
)
from hundred_days.models.game_state import GameState
from hundred_days.models.items import Item
from hundred_days.util.constants import MAX_MULTIPLIER
from hundred_days.util.types import format_quantities

log = logging.getLogger(__name__)


# -- Helpers -------------------------------------------------------------

def _resolve(game: GameState, action: Action) -> dict[str, Item]:
    """Look up every item an action references. Raises ItemNotFound."""
    return {name: game.get_item(name) for name in referenced_items(action)}


def _limiting(per_unit: Mapping[str, int], resolved: Mapping[str, Item]) -> int:
    """How many whole batches the scarcest input allows (0 without inputs)."""
    if not per_unit:
        return 0
    return min(resolved[name].amount // unit for name, unit in per_unit.items())


def _produce(action: Produce, item_name: str, resolved: Mapping[str, Item], multiplier: int) -> str:
    for name, unit in action.item_production.items():
        resolved[name].amount += unit * multiplier
    return f"{item_name} produced: {format_quantities(action.item_production, multiplier)}"


# -- Max activate --------------------------------------------------------

def max_activate(action: Action, item_name: str, game: GameState) -> int:
    """Largest multiplier *action* on *item_name* can be activated with.

    Raises:
        ItemNotFound: The owning item or a referenced item is missing.
    """
    item = game.get_item(item_name)
    resolved = _resolve(game, action)

    if isinstance(action, Buy):
        limit = game.currency // action.buy_price
    elif isinstance(action, (Sell, Deconstruct)):
        limit = item.amount
    elif isinstance(action, Construct):
        limit = _limiting(action.build_cost, resolved)
    elif isinstance(action, Produce):
        limit = MAX_MULTIPLIER
    elif isinstance(action, Reduce):
        limit = _limiting(action.item_reduction, resolved)
    else:
        raise TypeError(f"Not an action: {action!r}")

    return max(0, limit)


# -- Activate ------------------------------------------------------------

def activate(action: Action, item_name: str, game: GameState, multiplier: int) -> str:
    """Apply *action* on *item_name* exactly *multiplier* times.

    Returns:
        Result message naming the item, the multiplier and the deltas.

    Raises:
        InvalidMultiplier: multiplier is negative.
        ItemNotFound: The owning item or a referenced item is missing.
        InsufficientResources: multiplier exceeds max_activate
            (InsufficientCurrency for Buy).
    """
    if multiplier < 0:
        raise InvalidMultiplier(multiplier)

    item = game.get_item(item_name)
    resolved = _resolve(game, action)
    maximum = max_activate(action, item_name, game)
    if multiplier > maximum:
        if isinstance(action, Buy):
            raise InsufficientCurrency(maximum, multiplier)
        raise InsufficientResources(maximum, multiplier)

    if isinstance(action, Buy):
        total = action.buy_price * multiplier
        game.currency -= total
        item.amount += multiplier
        message = f"Purchased {multiplier} {item_name} for {total}"

    elif isinstance(action, Sell):
        total = action.sell_price * multiplier
        item.amount -= multiplier
        game.currency += total
        message = f"Sold {multiplier} {item_name} for {total}"

    elif isinstance(action, Construct):
        for name, unit in action.build_cost.items():
            resolved[name].amount -= unit * multiplier
        item.amount += multiplier
        message = (f"Constructed {multiplier} {item_name} for: "
                   f"{format_quantities(action.build_cost, multiplier)}")

    elif isinstance(action, Deconstruct):
        item.amount -= multiplier
        for name, unit in action.item_gain.items():
            resolved[name].amount += unit * multiplier
        message = (f"Deconstructed {multiplier} {item_name} for: "
                   f"{format_quantities(action.item_gain, multiplier)}")

    elif isinstance(action, Produce):
        message = _produce(action, item_name, resolved, multiplier)

    elif isinstance(action, Reduce):
        for name, unit in action.item_reduction.items():
            resolved[name].amount -= unit * multiplier
        message = f"{item_name} consumed: {format_quantities(action.item_reduction, multiplier)}"

    else:
        raise TypeError(f"Not an action: {action!r}")

    log.debug("activate %s on %s x%d: %s", type(action).__name__, item_name, multiplier, message)
    return message


def activate_passive(action: PassiveAction, item_name: str, game: GameState, multiplier: int) -> str:
    """Apply a passive action for a day pass.

    Neither variant rejects the tick. Production is applied at any
    multiplier, without the MAX_MULTIPLIER bound of manual activation.
    Each reduction target loses ``unit * multiplier`` clamped at zero and
    the shortfall is dropped.
    """
    if multiplier < 0:
        raise InvalidMultiplier(multiplier)

    game.get_item(item_name)
    resolved = _resolve(game, action)
    if isinstance(action, Produce):
        return _produce(action, item_name, resolved, multiplier)
    if not isinstance(action, Reduce):
        raise TypeError(f"Not a passive action: {action!r}")

    taken: dict[str, int] = {}
    for name, unit in action.item_reduction.items():
        target = resolved[name]
        taken[name] = min(unit * multiplier, max(0, target.amount))
        target.amount -= taken[name]

    shortfall = {name: unit * multiplier - taken[name]
                 for name, unit in action.item_reduction.items()
                 if unit * multiplier > taken[name]}
    if shortfall:
        log.info("%s could not consume %s, clamped at zero", item_name, shortfall)
    return f"{item_name} consumed: {format_quantities(taken)}"
