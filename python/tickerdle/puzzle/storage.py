"""Session persistence for the daily puzzle."""

from __future__ import annotations

import hashlib
import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from tickerdle.utils.env import ensure_system_env_dir

from .constants import DATA_DIR_NAME, SESSIONS_DIR_NAME
from .errors import PersistenceCorruptError
from .schemas import SessionRecord

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def get_sessions_root() -> Path:
    """Return the default directory for persisted sessions."""
    base_dir = ensure_system_env_dir()
    sessions_root = base_dir / DATA_DIR_NAME / SESSIONS_DIR_NAME
    sessions_root.mkdir(parents=True, exist_ok=True)
    return sessions_root


class SessionStore(ABC):
    """Key-value port for session records."""

    @abstractmethod
    def load(self, key: str) -> Optional[SessionRecord]:
        """Return the stored record, ``None`` if absent.

        Raises ``PersistenceCorruptError`` if the stored value cannot be parsed.
        """

    @abstractmethod
    def save(self, key: str, record: SessionRecord) -> None:
        """Store ``record`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``; return whether anything was removed."""


def _parse_record(raw: str, key: str) -> SessionRecord:
    try:
        return SessionRecord.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as exc:
        raise PersistenceCorruptError(
            f"Stored session {key!r} is unreadable: {exc}"
        ) from exc


class InMemorySessionStore(SessionStore):
    """Keeps serialized records in a dict; used by tests and ephemeral front ends."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def load(self, key: str) -> Optional[SessionRecord]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return _parse_record(raw, key)

    def save(self, key: str, record: SessionRecord) -> None:
        self._data[key] = record.model_dump_json()

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def put_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw


class JsonFileSessionStore(SessionStore):
    """One JSON file per key under a directory."""

    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = Path(root) if root is not None else get_sessions_root()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        safe_key = _UNSAFE_KEY_CHARS.sub("_", key)
        if safe_key != key:
            # A digest suffix keeps distinct keys in distinct files.
            digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:16]
            safe_key = f"{safe_key}~{digest}"
        return self._root / f"{safe_key}.json"

    def load(self, key: str) -> Optional[SessionRecord]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceCorruptError(
                f"Stored session {key!r} could not be read: {exc}"
            ) from exc
        return _parse_record(raw, key)

    def save(self, key: str, record: SessionRecord) -> None:
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._root, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(record.model_dump_json(indent=2))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved session {key} to {path}", key=key, path=path)

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted session {key}", key=key)
        return True
