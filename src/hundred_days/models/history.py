"""Message history: the last few result messages shown to the player.

Repeating the same action back to back does not push new lines; the
newest entry's count grows instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from hundred_days.util.constants import DEFAULT_HISTORY_LIMIT


@dataclass
class HistoryItem:
    """One displayed message and how many units it accounts for."""

    description: str
    amount: int


class MessageHistory:
    """Bounded, newest-first list of result messages.

    Args:
        limit: Maximum number of entries kept.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"history limit must be positive, got {limit}")
        self._limit = limit
        self._entries: list[HistoryItem] = []

    @property
    def entries(self) -> list[HistoryItem]:
        """Read-only view, newest first."""
        return list(self._entries)

    def add(self, description: str, amount: int = 1) -> None:
        """Record a message, merging with the newest one if identical."""
        if self._entries and self._entries[0].description == description:
            self._entries[0].amount += amount
            return
        self._entries.insert(0, HistoryItem(description, amount))
        del self._entries[self._limit:]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
