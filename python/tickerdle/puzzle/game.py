"""Daily game wiring: answer selection, session, suggestions and sharing."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from loguru import logger

from .config import GameSettings
from .errors import DataUnavailableError
from .lookup import EntityIndex
from .schedule import parse_day, schedule_for, today
from .schemas import Entity, GameState, GuessResult
from .session import GameSession
from .share import encode_result
from .storage import SessionStore


class DailyGame:
    """Request/response API for one player on one puzzle day."""

    def __init__(
        self,
        index: EntityIndex,
        settings: GameSettings,
        store: SessionStore,
        day: date | datetime | str | None = None,
        storage_key: Optional[str] = None,
    ) -> None:
        if len(index) == 0:
            raise DataUnavailableError()
        self.settings = settings
        self.index = index
        self.day = (
            today(settings.timezone)
            if day is None
            else parse_day(day, settings.timezone)
        )
        self.answer: Entity = schedule_for(self.day, index.entities, settings.salt)
        self.session = GameSession.restore(
            self.day,
            self.answer,
            index,
            settings.buckets,
            store,
            storage_key or settings.storage_key,
            max_guesses=settings.max_guesses,
            suggestion_limit=settings.suggestion_limit,
        )
        logger.debug(
            "Opened puzzle {day} with {guesses} guesses ({status})",
            day=self.day.isoformat(),
            guesses=len(self.session.guesses),
            status=self.session.status,
        )

    @classmethod
    def from_entities(
        cls,
        entities: Iterable[Entity],
        settings: GameSettings,
        store: SessionStore,
        day: date | datetime | str | None = None,
    ) -> "DailyGame":
        return cls(EntityIndex(entities), settings, store, day=day)

    def submit_guess(self, raw_input: Optional[str]) -> GuessResult:
        return self.session.submit_guess(raw_input)

    def suggestions(self, query: Optional[str], limit: Optional[int] = None) -> list[Entity]:
        guessed = set(self.session.guesses)
        candidates = self.index.suggest(
            query, (limit or self.settings.suggestion_limit) + len(guessed)
        )
        remaining = [entity for entity in candidates if entity.ticker not in guessed]
        return remaining[: limit or self.settings.suggestion_limit]

    def state(self) -> GameState:
        return GameState(
            date=self.session.date,
            status=self.session.status,
            max_guesses=self.session.max_guesses,
            guesses=self.session.history(),
            answer=self.answer if self.session.is_finished else None,
            notice=self.session.notice,
        )

    def share_text(self) -> str:
        return encode_result(
            self.session.record,
            self.answer,
            self.index,
            self.settings.buckets,
            max_guesses=self.settings.max_guesses,
            game_name=self.settings.game_name,
            share_url=self.settings.share_url,
        )
