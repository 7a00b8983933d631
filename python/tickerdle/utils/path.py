"""Path helpers."""

from __future__ import annotations

from pathlib import Path


def get_python_root_path() -> str:
    """Return the ``python/`` directory that holds the package, configs and data."""
    return str(Path(__file__).resolve().parents[2])
