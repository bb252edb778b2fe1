"""Formatting utilities.

Quantity maps, listings and counts rendered for result messages and
item information panels.
"""

from __future__ import annotations

from typing import Mapping


def format_quantities(quantities: Mapping[str, int], multiplier: int = 1) -> str:
    """Render a quantity map inline, scaled by *multiplier*.

    >>> format_quantities({"Wood": 2, "Stone": 3}, 2)
    '{ Wood: 4 Stone: 6 }'
    """
    body = "".join(f"{name}: {amount * multiplier} " for name, amount in quantities.items())
    return f"{{ {body}}}"


def format_listing(quantities: Mapping[str, int]) -> str:
    """Render a quantity map one entry per line."""
    return "".join(f"{name}: {amount}\n" for name, amount in quantities.items())


def format_days(days: int) -> str:
    """Format a day count with the right noun."""
    return f"{days} day" if abs(days) == 1 else f"{days} days"
