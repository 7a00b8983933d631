"""Tests for the result encoder."""

from tickerdle.puzzle.schemas import SessionRecord
from tickerdle.puzzle.share import encode_result


class TestEncodeResult:
    """Tests for encode_result."""

    def test_solved_in_two(self, index, settings):
        record = SessionRecord(date="2026-10-17", guesses=["UMB", "GBX"], solved=True)

        text = encode_result(record, index.get("GBX"), index, settings.buckets)

        assert text.splitlines() == [
            "Tickerdle 2026-10-17 — Solved in 2/8",
            "⬛⬛⬛⬛⬛⬛⬛",
            "🟩🟩🟩🟩🟩🟩🟩",
            "https://tickerdle.app",
        ]

    def test_unsolved_header(self, index, settings):
        record = SessionRecord(date="2026-10-17", guesses=["ACM", "INI"], solved=False)
        text = encode_result(
            record, index.get("GBX"), index, settings.buckets, max_guesses=2
        )
        assert text.splitlines()[0] == "Tickerdle 2026-10-17 — X/2"

    def test_unknown_ratio_on_both_sides_is_green(self, index, settings):
        record = SessionRecord(date="2026-10-17", guesses=["INI"])
        text = encode_result(record, index.get("HOOL"), index, settings.buckets)
        assert text.splitlines()[1] == "🟩⬛⬛⬛⬛⬛🟩"

    def test_custom_name_and_link(self, index, settings):
        record = SessionRecord(date="2026-10-17", guesses=["GBX"], solved=True)
        text = encode_result(
            record,
            index.get("GBX"),
            index,
            settings.buckets,
            game_name="Stockle",
            share_url="https://example.test/play",
        )
        lines = text.splitlines()
        assert lines[0] == "Stockle 2026-10-17 — Solved in 1/8"
        assert lines[-1] == "https://example.test/play"
        assert len(lines) == 3
