"""Entity list loading for the daily puzzle."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Iterable, Optional

from loguru import logger
from pydantic import ValidationError

from .errors import DataUnavailableError
from .schemas import DataAsOf, Entity

_STRING_FIELDS: tuple[str, ...] = ("sector", "hq")
_NUMERIC_FIELDS: dict[str, str] = {
    "founded": "founded",
    "price": "price",
    "marketCap": "market_cap",
    "employees": "employees",
    "pe": "pe",
}


def _clean_str(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _coerce_number(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_record(item: object) -> Optional[Entity]:
    if not isinstance(item, dict):
        return None
    name = _clean_str(item.get("name"))
    ticker = _clean_str(item.get("ticker")).upper()
    if not name or not ticker:
        return None
    fields: dict[str, Any] = {"name": name, "ticker": ticker}
    for key in _STRING_FIELDS:
        fields[key] = _clean_str(item.get(key))
    for source_key, field_name in _NUMERIC_FIELDS.items():
        raw = item.get(source_key, item.get(field_name))
        fields[field_name] = _coerce_number(raw)
    return Entity(**fields)


def coerce_entities(records: Iterable[object]) -> list[Entity]:
    """Validate raw records, dropping unusable ones and duplicate tickers."""
    entities: list[Entity] = []
    seen: set[str] = set()
    dropped = 0
    for item in records:
        entity = _parse_record(item)
        if entity is None:
            dropped += 1
            continue
        if entity.ticker in seen:
            logger.warning(
                "Dropping duplicate ticker {ticker} ({name})",
                ticker=entity.ticker,
                name=entity.name,
            )
            dropped += 1
            continue
        seen.add(entity.ticker)
        entities.append(entity)
    if dropped:
        logger.warning(
            "Dropped {dropped} invalid entity records; kept {kept}",
            dropped=dropped,
            kept=len(entities),
        )
    return entities


def load_entities(path: Path) -> list[Entity]:
    """Load and validate the entity list from a JSON file.

    Raises ``DataUnavailableError`` when the file is missing, unreadable, or
    holds no usable entity.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(
            "Failed to read entity list at {path}: {error}", path=path, error=exc
        )
        raise DataUnavailableError(f"Failed to load company data from {path}") from exc
    if isinstance(payload, dict):
        payload = payload.get("companies", payload.get("data", []))
    if not isinstance(payload, list):
        raise DataUnavailableError(f"Company data at {path} is not a list")
    entities = coerce_entities(payload)
    if not entities:
        raise DataUnavailableError(f"Company data at {path} holds no valid entries")
    logger.info(
        "Loaded {count} companies from {path}", count=len(entities), path=path
    )
    return entities


def load_data_asof(path: Path) -> Optional[DataAsOf]:
    """Read the refresh-job metadata file; ``None`` when absent or malformed."""
    if not path.exists():
        return None
    try:
        return DataAsOf.model_validate(
            json.loads(path.read_text(encoding="utf-8"))
        )
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning(
            "Failed to read data metadata at {path}: {error}", path=path, error=exc
        )
        return None
