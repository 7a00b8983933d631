"""Tests for the entity index."""

from tickerdle.puzzle.lookup import EntityIndex
from tickerdle.puzzle.schemas import Entity


def _tickers(entities):
    return [entity.ticker for entity in entities]


class TestEntityIndex:
    """Tests for EntityIndex lookups."""

    def test_get_is_case_insensitive(self, index):
        assert index.get("acm").ticker == "ACM"
        assert index.get(" Hool ").ticker == "HOOL"
        assert index.get("NOPE") is None
        assert index.get(None) is None
        assert "gbx" in index

    def test_by_name_uses_normalized_form(self, index):
        assert index.by_name("umbrella and sons").ticker == "UMB"
        assert index.by_name("UMBRELLA & SONS!").ticker == "UMB"
        assert index.by_name("") is None

    def test_duplicate_tickers_keep_first(self):
        index = EntityIndex(
            [
                Entity(ticker="DUP", name="First"),
                Entity(ticker="dup", name="Second"),
            ]
        )
        assert len(index) == 1
        assert index.get("DUP").name == "First"

    def test_iterates_in_collection_order(self, index, entities):
        assert list(index) == entities


class TestSuggest:
    """Tests for suggest."""

    def test_prefix_before_substring(self, index):
        assert _tickers(index.suggest("acme")) == ["ACM", "BAL"]

    def test_ticker_prefix(self, index):
        assert _tickers(index.suggest("str")) == ["STRK"]

    def test_limit(self, index):
        assert len(index.suggest("a", limit=3)) == 3
        assert _tickers(index.suggest("a", limit=1)) == ["ACM"]

    def test_blank_query(self, index):
        assert index.suggest("") == []
        assert index.suggest("   ") == []
        assert index.suggest(None) == []


class TestResolve:
    """Tests for resolve."""

    def test_ticker_first(self, index):
        assert index.resolve("bal").ticker == "BAL"

    def test_normalized_name(self, index):
        assert index.resolve("globex corporation").ticker == "GBX"

    def test_single_suggestion_accepted(self, index):
        assert index.resolve("hoo").ticker == "HOOL"

    def test_ambiguous_or_unknown(self, index):
        assert index.resolve("acme") is None
        assert index.resolve("zzz") is None
        assert index.resolve("") is None

    def test_small_limit_still_detects_ambiguity(self, index):
        assert index.resolve("acme", limit=1) is None
        assert index.resolve("hoo", limit=1).ticker == "HOOL"
