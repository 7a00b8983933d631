"""Daily session state machine."""

from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from loguru import logger

from .buckets import compare_entities
from .constants import DEFAULT_MAX_GUESSES, DEFAULT_SUGGESTION_LIMIT
from .errors import ERROR_MESSAGES, ErrorCode, PersistenceCorruptError
from .lookup import EntityIndex
from .schemas import (
    BucketDefinition,
    Entity,
    GameStatus,
    GuessFeedback,
    GuessResult,
    SessionRecord,
)
from .storage import SessionStore


class GameSession:
    """One player's session for one puzzle day.

    ``submit_guess`` never raises for player mistakes; rejections come back as a
    ``GuessResult`` with an error code and leave the session untouched.
    """

    def __init__(
        self,
        record: SessionRecord,
        answer: Entity,
        index: EntityIndex,
        buckets: Mapping[str, BucketDefinition],
        store: SessionStore,
        storage_key: str,
        max_guesses: int = DEFAULT_MAX_GUESSES,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        notice: Optional[ErrorCode] = None,
    ) -> None:
        if max_guesses < 1:
            raise ValueError("max_guesses must be at least 1")
        self._record = record
        self._answer = answer
        self._index = index
        self._buckets = buckets
        self._store = store
        self._storage_key = storage_key
        self._max_guesses = max_guesses
        self._suggestion_limit = suggestion_limit
        self.notice = notice

    @classmethod
    def restore(
        cls,
        day: date,
        answer: Entity,
        index: EntityIndex,
        buckets: Mapping[str, BucketDefinition],
        store: SessionStore,
        storage_key: str,
        max_guesses: int = DEFAULT_MAX_GUESSES,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> "GameSession":
        """Resume today's stored session, or start a fresh one."""
        day_key = day.isoformat()
        notice: Optional[ErrorCode] = None
        try:
            stored = store.load(storage_key)
        except PersistenceCorruptError as exc:
            logger.warning(
                "Discarding corrupt session {key}: {error}",
                key=storage_key,
                error=exc,
            )
            stored = None
            notice = "persistence_corrupt"

        if stored is not None and stored.date == day_key:
            record = cls._sanitize(stored, answer, index, max_guesses)
        else:
            if stored is not None:
                logger.info(
                    "Replacing stale session from {stored} with {today}",
                    stored=stored.date,
                    today=day_key,
                )
            record = SessionRecord(date=day_key)
        if notice is not None:
            store.save(storage_key, record)
        return cls(
            record,
            answer,
            index,
            buckets,
            store,
            storage_key,
            max_guesses=max_guesses,
            suggestion_limit=suggestion_limit,
            notice=notice,
        )

    @staticmethod
    def _sanitize(
        record: SessionRecord,
        answer: Entity,
        index: EntityIndex,
        max_guesses: int,
    ) -> SessionRecord:
        guesses: list[str] = []
        for ticker in record.guesses:
            entity = index.get(ticker)
            if entity is None or entity.ticker in guesses:
                continue
            guesses.append(entity.ticker)
        guesses = guesses[:max_guesses]
        if guesses != record.guesses:
            logger.warning(
                "Dropped unusable guesses from stored session {date}",
                date=record.date,
            )
        return SessionRecord(
            date=record.date,
            guesses=guesses,
            solved=answer.ticker in guesses,
        )

    @property
    def record(self) -> SessionRecord:
        return self._record.model_copy(deep=True)

    @property
    def date(self) -> str:
        return self._record.date

    @property
    def guesses(self) -> list[str]:
        return list(self._record.guesses)

    @property
    def answer(self) -> Entity:
        return self._answer

    @property
    def max_guesses(self) -> int:
        return self._max_guesses

    @property
    def status(self) -> GameStatus:
        if self._record.solved:
            return "solved"
        if len(self._record.guesses) >= self._max_guesses:
            return "exhausted"
        return "active"

    @property
    def is_finished(self) -> bool:
        return self.status != "active"

    def feedback_for(self, guess: Entity) -> GuessFeedback:
        return GuessFeedback(
            ticker=guess.ticker,
            name=guess.name,
            correct=guess.ticker == self._answer.ticker,
            attributes=compare_entities(guess, self._answer, self._buckets),
        )

    def history(self) -> list[GuessFeedback]:
        """Feedback for every recorded guess, oldest first."""
        history: list[GuessFeedback] = []
        for ticker in self._record.guesses:
            entity = self._index.get(ticker)
            if entity is not None:
                history.append(self.feedback_for(entity))
        return history

    def _reject(self, code: ErrorCode) -> GuessResult:
        return GuessResult(
            accepted=False,
            error=code,
            message=ERROR_MESSAGES[code],
            status=self.status,
            guesses_used=len(self._record.guesses),
            max_guesses=self._max_guesses,
        )

    def submit_guess(self, raw_input: Optional[str]) -> GuessResult:
        if self.is_finished:
            return self._reject("invalid_state")
        text = (raw_input or "").strip()
        if not text:
            return self._reject("empty_input")
        entity = self._index.resolve(text, self._suggestion_limit)
        if entity is None:
            return self._reject("no_match")
        if entity.ticker in self._record.guesses:
            return self._reject("duplicate_guess")

        self._record.guesses.append(entity.ticker)
        feedback = self.feedback_for(entity)
        if feedback.correct:
            self._record.solved = True
        self._store.save(self._storage_key, self._record)
        logger.debug(
            "Recorded guess {count}/{max_guesses} {ticker} for {date}: {status}",
            count=len(self._record.guesses),
            max_guesses=self._max_guesses,
            ticker=entity.ticker,
            date=self._record.date,
            status=self.status,
        )
        return GuessResult(
            accepted=True,
            feedback=feedback,
            status=self.status,
            guesses_used=len(self._record.guesses),
            max_guesses=self._max_guesses,
        )
