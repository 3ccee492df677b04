"""Unit tests for bounded search history."""

import pytest

from shiro_search.search.history import SearchHistory


@pytest.mark.unit
class TestSearchHistory:
    def test_most_recent_first(self):
        history = SearchHistory()
        history.add("first")
        history.add("second")
        assert history.entries() == ["second", "first"]

    def test_duplicates_move_to_front(self):
        history = SearchHistory(["b", "a"])
        assert history.add("a")
        assert history.entries() == ["a", "b"]

    def test_repeating_latest_query_is_a_no_op(self):
        history = SearchHistory(["a"])
        assert not history.add("a")
        assert history.entries() == ["a"]

    def test_entries_are_stripped(self):
        history = SearchHistory()
        history.add("  budget  ")
        history.add("budget")
        assert history.entries() == ["budget"]

    def test_blank_queries_are_ignored(self):
        history = SearchHistory()
        assert not history.add("")
        assert not history.add("   ")
        assert len(history) == 0

    def test_capacity_keeps_most_recent(self):
        history = SearchHistory()
        for i in range(25):
            history.add(f"query {i}")
        assert len(history) == 20
        assert history.entries()[0] == "query 24"
        assert history.entries()[-1] == "query 5"
        assert "query 4" not in history

    def test_initial_entries_are_normalized(self):
        history = SearchHistory([" a ", "a", "", 42, "b", "c"], limit=2)
        assert history.entries() == ["a", "b"]

    def test_entries_returns_copy(self):
        history = SearchHistory(["a"])
        history.entries().append("b")
        assert list(history) == ["a"]

    def test_clear(self):
        history = SearchHistory(["a", "b"])
        history.clear()
        assert history.entries() == []

    def test_invalid_limit(self):
        with pytest.raises(ValueError, match="positive"):
            SearchHistory(limit=0)
