"""Error taxonomy for the daily puzzle."""

from __future__ import annotations

from typing import Literal

ErrorCode = Literal[
    "invalid_state",
    "empty_input",
    "no_match",
    "duplicate_guess",
    "data_unavailable",
    "persistence_corrupt",
]

ERROR_MESSAGES: dict[str, str] = {
    "invalid_state": "Today's puzzle is already finished. Come back tomorrow!",
    "empty_input": "Type a company name or ticker.",
    "no_match": "No matching company. Pick one from the suggestions.",
    "duplicate_guess": "You already guessed that company.",
    "data_unavailable": "Company data could not be loaded.",
    "persistence_corrupt": "Saved progress was unreadable and has been reset.",
}


class PuzzleError(Exception):
    """Base error carrying a taxonomy code."""

    code: ErrorCode = "data_unavailable"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or ERROR_MESSAGES[self.code])
        self.message = message or ERROR_MESSAGES[self.code]


class DataUnavailableError(PuzzleError):
    """The entity collection is empty or failed to load."""

    code: ErrorCode = "data_unavailable"


class PersistenceCorruptError(PuzzleError):
    """A stored session record could not be parsed."""

    code: ErrorCode = "persistence_corrupt"
