"""Typed event bus: decoupled notification of engine results.

The economy service emits these after every resolved action and day
pass; the view layer (and the message history) subscribe.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, Type

T = TypeVar("T")


# -- Action events -------------------------------------------------------

@dataclass(frozen=True)
class ActionResolved:
    """An active or passive action was invoked (successfully or not)."""
    item: str
    action: str
    multiplier: int
    message: str
    success: bool


# -- Clock events --------------------------------------------------------

@dataclass(frozen=True)
class DayPassed:
    """The day counter advanced and all passive actions fired."""
    days: int
    day: int  # remaining days after the pass
    message: str


@dataclass(frozen=True)
class GameEnded:
    """The day counter dropped below zero."""
    day: int


# -- Event Bus -----------------------------------------------------------

class EventBus:
    """Simple synchronous event bus with typed events.

    Usage:
        bus = EventBus()
        bus.on(DayPassed, lambda e: print(e.day))
        bus.emit(DayPassed(days=1, day=99, message=""))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def on(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def off(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unregister a handler."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers."""
        for handler in list(self._handlers.get(type(event), [])):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
