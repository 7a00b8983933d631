"""Service layer for the daily puzzle API."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from loguru import logger

from tickerdle.puzzle.config import GameSettings, load_game_settings
from tickerdle.puzzle.errors import DataUnavailableError
from tickerdle.puzzle.game import DailyGame
from tickerdle.puzzle.lookup import EntityIndex
from tickerdle.puzzle.schemas import DataAsOf, Entity, GameState, GuessResult
from tickerdle.puzzle.storage import JsonFileSessionStore, SessionStore
from tickerdle.puzzle.universe import load_data_asof, load_entities

DayProvider = Callable[[], "date | datetime | str | None"]


class GameService:
    """Holds the immutable company index and opens per-player daily games."""

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        store: Optional[SessionStore] = None,
        entities: Optional[list[Entity]] = None,
        day_provider: Optional[DayProvider] = None,
    ) -> None:
        self.settings = settings or load_game_settings()
        self.store = store or JsonFileSessionStore()
        self._index: Optional[EntityIndex] = (
            EntityIndex(entities) if entities is not None else None
        )
        self._day_provider = day_provider or (lambda: None)

    @property
    def index(self) -> EntityIndex:
        """Company index, loaded once on first use."""
        if self._index is None:
            entities = load_entities(self.settings.resolved_entities_path())
            self._index = EntityIndex(entities)
        if len(self._index) == 0:
            raise DataUnavailableError()
        return self._index

    def preload(self) -> int:
        """Load the company index now; raises ``DataUnavailableError`` if it cannot."""
        return len(self.index)

    def storage_key(self, player_id: str) -> str:
        return f"{self.settings.storage_key}.{player_id}"

    def open_game(self, player_id: str) -> DailyGame:
        return DailyGame(
            self.index,
            self.settings,
            self.store,
            day=self._day_provider(),
            storage_key=self.storage_key(player_id),
        )

    def get_state(self, player_id: str) -> GameState:
        return self.open_game(player_id).state()

    def submit_guess(self, player_id: str, raw_input: str) -> GuessResult:
        result = self.open_game(player_id).submit_guess(raw_input)
        if not result.accepted:
            logger.info(
                "Rejected guess from {player}: {code}",
                player=player_id,
                code=result.error,
            )
        return result

    def get_suggestions(
        self, player_id: str, query: str, limit: Optional[int] = None
    ) -> list[Entity]:
        return self.open_game(player_id).suggestions(query, limit)

    def get_share_text(self, player_id: str) -> Optional[tuple[str, str]]:
        """Return ``(date, text)`` once the session is finished, else ``None``."""
        game = self.open_game(player_id)
        if not game.session.is_finished:
            return None
        return game.session.date, game.share_text()

    def get_data_asof(self) -> Optional[DataAsOf]:
        return load_data_asof(self.settings.resolved_asof_path())
