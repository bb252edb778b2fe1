"""Tests for the coalescing message history."""

import pytest

from hundred_days.models.history import HistoryItem, MessageHistory


class TestMessageHistory:

    def test_newest_first(self):
        history = MessageHistory()
        history.add("a")
        history.add("b")
        assert [e.description for e in history.entries] == ["b", "a"]

    def test_repeat_merges_into_newest(self):
        history = MessageHistory()
        history.add("Purchased 1 Wood for 5", 1)
        history.add("Purchased 1 Wood for 5", 1)
        assert history.entries == [HistoryItem("Purchased 1 Wood for 5", 2)]

    def test_only_newest_is_merged(self):
        history = MessageHistory()
        history.add("a")
        history.add("b")
        history.add("a")
        assert [e.description for e in history.entries] == ["a", "b", "a"]

    def test_limit(self):
        history = MessageHistory(limit=3)
        for text in "abcde":
            history.add(text)
        assert len(history) == 3
        assert [e.description for e in history.entries] == ["e", "d", "c"]

    def test_entries_is_a_copy(self):
        history = MessageHistory()
        history.add("a")
        history.entries.clear()
        assert len(history) == 1

    def test_clear(self):
        history = MessageHistory()
        history.add("a")
        history.clear()
        assert history.entries == []

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            MessageHistory(limit=0)
