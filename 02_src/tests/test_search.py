"""Tests for SearchFilter."""

from runwatch.client import SearchFilter


class CountingPredicate:
    def __init__(self):
        self.calls = 0

    def __call__(self, item: str, query: str) -> bool:
        self.calls += 1
        return query.lower() in item.lower()


class TestSearchFilter:
    """Tests for client-side search."""

    def test_empty_query_returns_source(self):
        """Test that no query yields the source itself without filtering."""
        items = ["planner", "coder"]
        predicate = CountingPredicate()
        search = SearchFilter(items, predicate)

        assert search.filtered is items
        assert predicate.calls == 0

    def test_filter_keeps_order(self):
        """Test that matches come back in source order."""
        search = SearchFilter(["planner", "coder", "reviewer", "code-review"], CountingPredicate())

        search.query = "code"

        assert search.filtered == ["coder", "code-review"]

    def test_no_matches(self):
        """Test that a query matching nothing gives an empty list."""
        search = SearchFilter(["planner"], CountingPredicate())
        search.query = "zzz"

        assert search.filtered == []

    def test_result_memoized(self):
        """Test that unchanged inputs do not re-run the predicate."""
        predicate = CountingPredicate()
        search = SearchFilter(["a", "b", "ab"], predicate)
        search.query = "a"

        first = search.filtered
        calls = predicate.calls
        second = search.filtered

        assert first is second
        assert predicate.calls == calls

    def test_recomputes_on_query_change(self):
        """Test that a new query refilters."""
        search = SearchFilter(["alpha", "beta"], CountingPredicate())

        search.query = "al"
        assert search.filtered == ["alpha"]
        search.query = "be"
        assert search.filtered == ["beta"]

    def test_recomputes_on_new_items(self):
        """Test that replacing the source collection refilters."""
        search = SearchFilter(["alpha"], CountingPredicate())
        search.query = "a"
        assert search.filtered == ["alpha"]

        search.items = ["alpha", "gamma"]

        assert search.filtered == ["alpha", "gamma"]

    def test_clear_restores_source(self):
        """Test that clearing the query returns the full source."""
        items = ["alpha", "beta"]
        search = SearchFilter(items, CountingPredicate())
        search.query = "be"

        search.clear()

        assert search.query == ""
        assert search.filtered is items
