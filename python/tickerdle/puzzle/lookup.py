"""Entity index for guess resolution and autocomplete."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from loguru import logger

from .constants import DEFAULT_SUGGESTION_LIMIT
from .normalize import normalize
from .schemas import Entity


class EntityIndex:
    """Immutable ticker and normalized-name index over a validated entity list."""

    def __init__(self, entities: Iterable[Entity]) -> None:
        ordered: list[Entity] = []
        by_ticker: dict[str, Entity] = {}
        by_name: dict[str, Entity] = {}
        for entity in entities:
            key = entity.ticker.strip().upper()
            if key in by_ticker:
                logger.warning("Skipping duplicate ticker {ticker}", ticker=key)
                continue
            by_ticker[key] = entity
            by_name.setdefault(normalize(entity.name), entity)
            ordered.append(entity)
        self._entities: tuple[Entity, ...] = tuple(ordered)
        self._by_ticker = by_ticker
        self._by_name = by_name
        self._search_keys: tuple[tuple[str, str, Entity], ...] = tuple(
            (normalize(entity.name), normalize(entity.ticker), entity)
            for entity in ordered
        )

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __contains__(self, ticker: object) -> bool:
        return isinstance(ticker, str) and ticker.strip().upper() in self._by_ticker

    @property
    def entities(self) -> tuple[Entity, ...]:
        return self._entities

    def get(self, ticker: Optional[str]) -> Optional[Entity]:
        if not ticker:
            return None
        return self._by_ticker.get(ticker.strip().upper())

    def by_name(self, name: Optional[str]) -> Optional[Entity]:
        key = normalize(name)
        if not key:
            return None
        return self._by_name.get(key)

    def suggest(
        self, query: Optional[str], limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> list[Entity]:
        """Prefix matches first, then substring matches, in collection order."""
        q = normalize(query)
        if not q or limit <= 0:
            return []
        prefix: list[Entity] = []
        contains: list[Entity] = []
        for name_key, ticker_key, entity in self._search_keys:
            if name_key.startswith(q) or ticker_key.startswith(q):
                prefix.append(entity)
            elif q in name_key or q in ticker_key:
                contains.append(entity)
        return (prefix + contains)[:limit]

    def resolve(
        self, raw: Optional[str], limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> Optional[Entity]:
        """Resolve free text to an entity: ticker, then name, then a lone suggestion."""
        text = (raw or "").strip()
        if not text:
            return None
        entity = self.get(text) or self.by_name(text)
        if entity is not None:
            return entity
        # Two results are enough to tell a lone match from an ambiguous one.
        suggestions = self.suggest(text, max(limit, 2))
        if len(suggestions) == 1:
            logger.debug(
                "Accepting sole suggestion {ticker} for {query}",
                ticker=suggestions[0].ticker,
                query=text,
            )
            return suggestions[0]
        return None
