"""Tests for the session state machine."""

from datetime import date

import pytest

from tickerdle.puzzle.schemas import SessionRecord
from tickerdle.puzzle.session import GameSession

KEY = "test_state"
DAY = date(2026, 10, 17)


@pytest.fixture
def answer(index):
    return index.get("GBX")


def _open(index, answer, settings, store, max_guesses=8):
    return GameSession.restore(
        DAY, answer, index, settings.buckets, store, KEY, max_guesses=max_guesses
    )


class TestSubmitGuess:
    """Tests for GameSession.submit_guess."""

    def test_fresh_session(self, index, answer, settings, store):
        session = _open(index, answer, settings, store)
        assert session.status == "active"
        assert session.guesses == []
        assert session.date == "2026-10-17"

    def test_correct_guess_solves(self, index, answer, settings, store):
        session = _open(index, answer, settings, store)
        result = session.submit_guess("GBX")

        assert result.accepted is True
        assert result.status == "solved"
        assert result.feedback.correct is True
        assert all(item.match for item in result.feedback.attributes)
        assert store.load(KEY).solved is True

    def test_solve_ignores_remaining_budget(self, index, answer, settings, store):
        session = _open(index, answer, settings, store)
        session.submit_guess("ACM")
        result = session.submit_guess("globex corporation")
        assert result.status == "solved"
        assert result.guesses_used == 2

    def test_last_wrong_guess_exhausts(self, index, answer, settings, store):
        session = _open(index, answer, settings, store, max_guesses=3)
        assert session.submit_guess("ACM").status == "active"
        assert session.submit_guess("INI").status == "active"
        result = session.submit_guess("BAL")
        assert result.accepted is True
        assert result.status == "exhausted"
        assert store.load(KEY).solved is False

    def test_solving_on_last_guess(self, index, answer, settings, store):
        session = _open(index, answer, settings, store, max_guesses=2)
        session.submit_guess("ACM")
        assert session.submit_guess("GBX").status == "solved"

    @pytest.mark.parametrize("finisher", ["GBX", "exhaust"])
    def test_terminal_rejects_without_mutation(
        self, index, answer, settings, store, finisher
    ):
        session = _open(index, answer, settings, store, max_guesses=1)
        session.submit_guess("GBX" if finisher == "GBX" else "ACM")
        before = session.guesses

        result = session.submit_guess("HOOL")

        assert result.accepted is False
        assert result.error == "invalid_state"
        assert result.message
        assert session.guesses == before
        assert store.load(KEY).guesses == before

    def test_empty_input(self, index, answer, settings, store):
        session = _open(index, answer, settings, store)
        assert session.submit_guess("   ").error == "empty_input"
        assert session.submit_guess(None).error == "empty_input"
        assert store.load(KEY) is None

    def test_no_match(self, index, answer, settings, store):
        session = _open(index, answer, settings, store)
        result = session.submit_guess("acme")
        assert result.error == "no_match"
        assert result.guesses_used == 0

    def test_no_match_with_single_suggestion_limit(self, index, answer, settings, store):
        session = GameSession.restore(
            DAY, answer, index, settings.buckets, store, KEY, suggestion_limit=1
        )
        result = session.submit_guess("acme")
        assert result.error == "no_match"
        assert session.guesses == []

    def test_duplicate_guess(self, index, answer, settings, store):
        session = _open(index, answer, settings, store)
        session.submit_guess("acm")

        result = session.submit_guess("Acme Corp")

        assert result.error == "duplicate_guess"
        assert session.guesses == ["ACM"]
        assert store.load(KEY).guesses == ["ACM"]

    def test_history_in_chronological_order(self, index, answer, settings, store):
        session = _open(index, answer, settings, store)
        session.submit_guess("WAYN")
        session.submit_guess("hoo")
        assert [item.ticker for item in session.history()] == ["WAYN", "HOOL"]


class TestRestore:
    """Tests for restoring persisted sessions."""

    def test_resumes_same_day(self, index, answer, settings, store):
        store.save(KEY, SessionRecord(date="2026-10-17", guesses=["ACM", "INI"]))
        session = _open(index, answer, settings, store)
        assert session.guesses == ["ACM", "INI"]
        assert session.status == "active"

    def test_stale_day_starts_fresh(self, index, answer, settings, store):
        store.save(KEY, SessionRecord(date="2026-10-16", guesses=["GBX"], solved=True))
        session = _open(index, answer, settings, store)
        assert session.guesses == []
        assert session.status == "active"

    def test_corrupt_record_is_discarded(self, index, answer, settings, store):
        store.put_raw(KEY, "{not json")
        session = _open(index, answer, settings, store)

        assert session.notice == "persistence_corrupt"
        assert session.guesses == []
        assert store.load(KEY).date == "2026-10-17"

    def test_sanitizes_stored_guesses(self, index, answer, settings, store):
        store.save(
            KEY,
            SessionRecord(date="2026-10-17", guesses=["acm", "GONE", "ACM", "GBX"]),
        )
        session = _open(index, answer, settings, store)
        assert session.guesses == ["ACM", "GBX"]
        assert session.status == "solved"

    def test_truncates_to_budget(self, index, answer, settings, store):
        store.save(
            KEY,
            SessionRecord(date="2026-10-17", guesses=["ACM", "INI", "BAL", "UMB"]),
        )
        session = _open(index, answer, settings, store, max_guesses=2)
        assert session.guesses == ["ACM", "INI"]
        assert session.status == "exhausted"
