"""Load puzzle configuration files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from loguru import logger
from pydantic import BaseModel, Field, field_validator

from tickerdle.utils.path import get_python_root_path

from .constants import (
    ASOF_FILE_NAME,
    DEFAULT_BUCKETS,
    DEFAULT_MAX_GUESSES,
    DEFAULT_SUGGESTION_LIMIT,
    ENTITIES_FILE_NAME,
    GAME_NAME,
    REFERENCE_TIMEZONE,
    SCHEDULE_SALT,
    SHARE_URL,
    STORAGE_KEY,
)
from .schemas import BucketDefinition

DEFAULT_CONFIG_NAME: str = "default"


def get_game_config_dir() -> Path:
    """Return the directory containing puzzle configs."""
    return Path(get_python_root_path()) / "configs" / "game"


def get_default_data_dir() -> Path:
    """Return the directory holding the bundled company data."""
    return Path(get_python_root_path()) / "data"


def load_game_config(name: str = DEFAULT_CONFIG_NAME) -> dict[str, Any]:
    """Load a puzzle configuration YAML file by name."""
    config_path = get_game_config_dir() / f"{name}.yaml"
    if not config_path.exists():
        return {}
    with config_path.open("r", encoding="utf-8") as file:
        return yaml.safe_load(file) or {}


def _default_buckets() -> dict[str, BucketDefinition]:
    return {
        attribute: BucketDefinition.from_pairs(pairs)
        for attribute, pairs in DEFAULT_BUCKETS.items()
    }


class GameSettings(BaseModel):
    """Runtime settings for the daily puzzle."""

    game_name: str = Field(default=GAME_NAME, description="Name in share text")
    share_url: str = Field(default=SHARE_URL, description="Link in share text")
    max_guesses: int = Field(default=DEFAULT_MAX_GUESSES, ge=1, description="Guess budget")
    suggestion_limit: int = Field(
        default=DEFAULT_SUGGESTION_LIMIT, ge=1, description="Autocomplete size"
    )
    salt: str = Field(default=SCHEDULE_SALT, min_length=1, description="Schedule salt")
    timezone: str = Field(
        default=REFERENCE_TIMEZONE, description="Timezone defining the puzzle day"
    )
    storage_key: str = Field(default=STORAGE_KEY, description="Session storage key")
    entities_path: Optional[Path] = Field(
        default=None, description="Company list JSON; bundled data when unset"
    )
    asof_path: Optional[Path] = Field(
        default=None, description="Refresh metadata JSON; bundled data when unset"
    )
    buckets: dict[str, BucketDefinition] = Field(
        default_factory=_default_buckets, description="Bucket definitions"
    )

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value

    @field_validator("buckets", mode="before")
    @classmethod
    def _parse_buckets(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        parsed: dict[str, Any] = dict(_default_buckets())
        for attribute, definition in value.items():
            # YAML allows the short form: a plain list of {label, upper}.
            if isinstance(definition, list):
                definition = {"bounds": definition}
            parsed[attribute] = definition
        return parsed

    def resolved_entities_path(self) -> Path:
        return self.entities_path or get_default_data_dir() / ENTITIES_FILE_NAME

    def resolved_asof_path(self) -> Path:
        return self.asof_path or get_default_data_dir() / ASOF_FILE_NAME


_ENV_OVERRIDES: dict[str, str] = {
    "TICKERDLE_ENTITIES_PATH": "entities_path",
    "TICKERDLE_ASOF_PATH": "asof_path",
    "TICKERDLE_SALT": "salt",
    "TICKERDLE_MAX_GUESSES": "max_guesses",
    "TICKERDLE_TIMEZONE": "timezone",
}


def load_game_settings(name: str = DEFAULT_CONFIG_NAME) -> GameSettings:
    """Build settings from the YAML file, then apply environment overrides."""
    payload = load_game_config(name)
    for env_var, field_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            payload[field_name] = value
    settings = GameSettings.model_validate(payload)
    logger.debug(
        "Loaded game settings {name}: max_guesses={max_guesses} timezone={timezone}",
        name=name,
        max_guesses=settings.max_guesses,
        timezone=settings.timezone,
    )
    return settings
