"""Engine errors.

Raised by the activation engine and turned into user-facing messages by
the economy service. None of them leaves a partial effect behind.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for recoverable engine errors.

    ``str(error)`` is the text shown to the player.
    """


class ItemNotFound(EngineError, KeyError):
    """A referenced item name is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Could not find item {self.name!r}"


class InsufficientResources(EngineError):
    """The requested multiplier exceeds what the state can afford."""

    def __init__(self, maximum: int, requested: int) -> None:
        super().__init__(maximum, requested)
        self.maximum = maximum
        self.requested = requested

    def __str__(self) -> str:
        return f"Can only be called {self.maximum} more times"


class InsufficientCurrency(InsufficientResources):
    """A Buy was requested for more units than the wallet covers."""


class InvalidMultiplier(EngineError, ValueError):
    """The multiplier is negative."""

    def __init__(self, multiplier: int) -> None:
        super().__init__(multiplier)
        self.multiplier = multiplier

    def __str__(self) -> str:
        return f"Activation amount must not be negative (got {self.multiplier})"
