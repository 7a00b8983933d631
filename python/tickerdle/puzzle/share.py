"""Shareable text summary of a finished session."""

from __future__ import annotations

from typing import Mapping

from loguru import logger

from .buckets import compare_entities
from .constants import DEFAULT_MAX_GUESSES, GAME_NAME, MATCH_TILE, MISS_TILE, SHARE_URL
from .lookup import EntityIndex
from .schemas import BucketDefinition, Entity, SessionRecord


def result_summary(record: SessionRecord, max_guesses: int) -> str:
    if record.solved:
        return f"Solved in {len(record.guesses)}/{max_guesses}"
    return f"X/{max_guesses}"


def encode_result(
    record: SessionRecord,
    answer: Entity,
    index: EntityIndex,
    buckets: Mapping[str, BucketDefinition],
    max_guesses: int = DEFAULT_MAX_GUESSES,
    game_name: str = GAME_NAME,
    share_url: str = SHARE_URL,
) -> str:
    """Header line, one tile row per guess (oldest first), then the link."""
    lines = [f"{game_name} {record.date} — {result_summary(record, max_guesses)}"]
    for ticker in record.guesses:
        guess = index.get(ticker)
        if guess is None:
            logger.warning("Skipping unknown ticker {ticker} in share text", ticker=ticker)
            continue
        tiles = compare_entities(guess, answer, buckets)
        lines.append("".join(MATCH_TILE if tile.match else MISS_TILE for tile in tiles))
    lines.append(share_url)
    return "\n".join(lines)
