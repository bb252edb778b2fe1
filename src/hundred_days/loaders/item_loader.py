"""Item loader: parses item records into Item models.

Actions are written as single-key mappings naming the variant:

    active_actions:
      - Buy: {buy_price: 5}
      - Construct: {build_cost: {Wood: 10, Stone: 2}}
    passive_actions:
      - Produce: {item_production: {Planks: 2}}

``actions_active`` / ``actions_passive`` are accepted as aliases.
"""

from __future__ import annotations

from typing import Any

from hundred_days.models.actions import (
    ACTIVE_TYPES,
    PASSIVE_TYPES,
    Action,
    Buy,
    Construct,
    Deconstruct,
    Produce,
    Reduce,
    Sell,
)
from hundred_days.models.items import Item, ItemCategory

_ACTIVE_KEYS = ("active_actions", "actions_active")
_PASSIVE_KEYS = ("passive_actions", "actions_passive")


class ConfigError(Exception):
    """The data document is malformed. Fatal at startup."""


# -- Scalars -------------------------------------------------------------

def parse_int(value: Any, where: str, minimum: int | None = None) -> int:
    """Validate an integer quantity, optionally with a lower bound."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}: expected an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ConfigError(f"{where}: must be at least {minimum}, got {value}")
    return value


def _quantities(raw: Any, where: str, minimum: int) -> dict[str, int]:
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: expected a mapping of item to amount, got {raw!r}")
    return {str(name): parse_int(amount, f"{where}.{name}", minimum)
            for name, amount in raw.items()}


def _param(params: dict, key: str, where: str) -> Any:
    if key not in params:
        raise ConfigError(f"{where}: missing parameter {key!r}")
    return params[key]


# -- Actions -------------------------------------------------------------

def parse_action(raw: Any, types: dict[str, type], where: str) -> Action:
    """Parse one ``{Tag: {params}}`` action definition.

    Divisors (buy price, construction cost, daily reduction) must be
    positive; everything else must be non-negative.
    """
    if not isinstance(raw, dict) or len(raw) != 1:
        raise ConfigError(f"{where}: expected a single-key mapping like {{Buy: {{...}}}}, got {raw!r}")

    (tag, params), = raw.items()
    cls = types.get(tag)
    if cls is None:
        raise ConfigError(f"{where}: unknown action {tag!r} (expected one of {', '.join(types)})")
    params = params or {}
    if not isinstance(params, dict):
        raise ConfigError(f"{where}.{tag}: expected a mapping of parameters, got {params!r}")
    where = f"{where}.{tag}"

    if cls is Buy:
        return Buy(parse_int(_param(params, "buy_price", where), f"{where}.buy_price", 1))
    if cls is Sell:
        return Sell(parse_int(_param(params, "sell_price", where), f"{where}.sell_price", 0))
    if cls is Construct:
        return Construct(_quantities(_param(params, "build_cost", where), f"{where}.build_cost", 1))
    if cls is Deconstruct:
        return Deconstruct(_quantities(_param(params, "item_gain", where), f"{where}.item_gain", 0))
    if cls is Produce:
        return Produce(_quantities(_param(params, "item_production", where),
                                   f"{where}.item_production", 0))
    if cls is Reduce:
        return Reduce(_quantities(_param(params, "item_reduction", where),
                                  f"{where}.item_reduction", 1))
    raise TypeError(f"Unhandled action type: {cls!r}")


def _action_list(attrs: dict, keys: tuple[str, ...], types: dict[str, type], where: str) -> list:
    present = [k for k in keys if k in attrs]
    if len(present) > 1:
        raise ConfigError(f"{where}: both {present[0]!r} and {present[1]!r} given")
    if not present:
        return []
    key = present[0]
    raw = attrs[key] or []
    if not isinstance(raw, list):
        raise ConfigError(f"{where}.{key}: expected a list, got {raw!r}")
    return [parse_action(a, types, f"{where}.{key}[{i}]") for i, a in enumerate(raw)]


# -- Items ---------------------------------------------------------------

def parse_item(name: str, attrs: Any) -> Item:
    """Parse a single item record keyed by *name*."""
    where = f"items.{name}"
    if not isinstance(attrs, dict):
        raise ConfigError(f"{where}: expected a mapping, got {attrs!r}")

    declared = attrs.get("name", name)
    if declared != name:
        raise ConfigError(f"{where}: name {declared!r} does not match its key")

    try:
        category = ItemCategory(attrs.get("category", ItemCategory.RESOURCE.value))
    except ValueError:
        raise ConfigError(
            f"{where}.category: expected one of "
            f"{', '.join(c.value for c in ItemCategory)}, got {attrs.get('category')!r}"
        ) from None

    industries = attrs.get("industries", []) or []
    if not isinstance(industries, list):
        raise ConfigError(f"{where}.industries: expected a list, got {industries!r}")

    return Item(
        name=name,
        amount=parse_int(attrs.get("amount", 0), f"{where}.amount"),
        category=category,
        industries=[str(tag) for tag in industries],
        active_actions=_action_list(attrs, _ACTIVE_KEYS, ACTIVE_TYPES, where),
        passive_actions=_action_list(attrs, _PASSIVE_KEYS, PASSIVE_TYPES, where),
    )


def parse_items(section: Any) -> list[Item]:
    """Parse the ``items`` mapping {name: record} into Items."""
    if not isinstance(section, dict):
        raise ConfigError(f"items: expected a mapping of name to item, got {section!r}")
    return [parse_item(str(name), attrs) for name, attrs in section.items()]
