"""Environment helpers."""

from __future__ import annotations

import os
from pathlib import Path

SYSTEM_ENV_DIR_VAR: str = "TICKERDLE_HOME"


def get_system_env_dir() -> Path:
    """Return the per-user data directory, honouring ``TICKERDLE_HOME``."""
    override = os.getenv(SYSTEM_ENV_DIR_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "tickerdle"


def ensure_system_env_dir() -> Path:
    """Return the per-user data directory, creating it if needed."""
    path = get_system_env_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path
