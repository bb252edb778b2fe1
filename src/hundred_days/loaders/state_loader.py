"""State loader: builds the starting GameState from the data document.

The document is read with PyYAML, so both YAML and the JSON variant of
the format load:

    day: 100
    currency: 100
    industries: [Logging]
    global_actions: [PassDay]
    items:
      Wood: {amount: 0, category: Resource, active_actions: [{Buy: {buy_price: 5}}]}

Any problem (shape, types, references to items that do not exist) raises
ConfigError; the game cannot start without valid data.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from hundred_days.loaders.item_loader import ConfigError, parse_int, parse_items
from hundred_days.models.actions import Deconstruct, GlobalAction, referenced_items
from hundred_days.models.game_state import GameState
from hundred_days.models.items import Item
from hundred_days.util.constants import DEFAULT_DATA_PATH

log = logging.getLogger(__name__)


def load_state(path: str | Path = DEFAULT_DATA_PATH) -> GameState:
    """Load the starting game state from a YAML or JSON file.

    Raises:
        FileNotFoundError: The file does not exist.
        ConfigError: The file cannot be parsed or fails validation.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: {exc}") from exc

    game = parse_state(data)
    log.info("Loaded game data from %s (%d items, day %d, currency %d)",
             path, len(game.items), game.day, game.currency)
    return game


def parse_state(data: Any) -> GameState:
    """Validate a parsed document and build the GameState."""
    if not isinstance(data, dict):
        raise ConfigError(f"expected a mapping at the top level, got {type(data).__name__}")

    for key in ("day", "currency", "items"):
        if key not in data:
            raise ConfigError(f"missing top-level key {key!r}")

    day = parse_int(data["day"], "day")
    currency = parse_int(data["currency"], "currency")

    industries = data.get("industries", []) or []
    if not isinstance(industries, list):
        raise ConfigError(f"industries: expected a list, got {industries!r}")
    industries = [str(tag) for tag in industries]

    items = {item.name: item for item in parse_items(data["items"] or {})}
    _check_references(items)
    _check_industries(items, industries)

    return GameState(
        day=day,
        currency=currency,
        items=items,
        industries=industries,
        global_actions=_parse_global_actions(data.get("global_actions", [GlobalAction.PASS_DAY.value])),
        starting_day=day,
    )


def _parse_global_actions(raw: Any) -> list[GlobalAction]:
    if not isinstance(raw, list):
        raise ConfigError(f"global_actions: expected a list, got {raw!r}")
    actions = []
    for i, name in enumerate(raw):
        try:
            actions.append(GlobalAction(name))
        except ValueError:
            raise ConfigError(
                f"global_actions[{i}]: unknown global action {name!r} "
                f"(expected one of {', '.join(a.value for a in GlobalAction)})"
            ) from None
    return actions


def _check_references(items: dict[str, Item]) -> None:
    """Every item an action names must exist in the registry."""
    for item in items.values():
        for action in [*item.active_actions, *item.passive_actions]:
            for name in referenced_items(action):
                if name not in items:
                    raise ConfigError(
                        f"items.{item.name}: {type(action).__name__} references "
                        f"unknown item {name!r}"
                    )
            if isinstance(action, Deconstruct) and item.name in action.item_gain:
                raise ConfigError(
                    f"items.{item.name}: Deconstruct returns the item itself"
                )


def _check_industries(items: dict[str, Item], industries: list[str]) -> None:
    """Undeclared industry tags are logged, not rejected."""
    declared = set(industries)
    for item in items.values():
        for tag in item.industries:
            if tag not in declared:
                log.warning("Item %s uses undeclared industry %r", item.name, tag)
