"""Durable storage for saves and checkpoints.

Two keys per session, both derived from a session identifier that is passed
in at construction:

    soul_bridge_save_<session_id>        written after every committed change
    soul_bridge_checkpoint_<session_id>  written only before a scripted ending

Storage failures never interrupt the game. PersistenceManager logs them and
reports failure through its return value; the in-memory session stays
authoritative.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from game.exceptions import PersistenceError
from game.state import SaveState

logger = logging.getLogger(__name__)

KEY_PREFIX = "soul_bridge"


class KeyValueStore(ABC):
    """Minimal string key-value storage backend.

    Implementations raise PersistenceError when the backend fails.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; removing an absent key is not an error."""


class MemoryStore(KeyValueStore):
    """Process-local store, used when no save directory is configured."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore(KeyValueStore):
    """One ``<key>.json`` file per key inside ``directory``.

    Writes go to a temporary file that is then renamed over the target, so a
    crash mid-write never leaves a truncated save behind.

    Args:
        directory: Directory holding the files (created if missing).
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError(f"Failed to read {path}: {e}", key=key) from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Failed to write {path}: {e}", key=key) from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to delete {path}: {e}", key=key) from e


class PersistenceManager:
    """Reads and writes session snapshots under session-scoped keys.

    Args:
        store: Storage backend.
        session_id: Player/session identifier the keys are derived from.
    """

    def __init__(self, store: KeyValueStore, session_id: str) -> None:
        if not session_id:
            raise ValueError("session_id cannot be empty")
        self.store = store
        self.session_id = session_id

    @property
    def save_key(self) -> str:
        return f"{KEY_PREFIX}_save_{self.session_id}"

    @property
    def checkpoint_key(self) -> str:
        return f"{KEY_PREFIX}_checkpoint_{self.session_id}"

    def save(self, state: SaveState) -> bool:
        """Write the primary save.

        Returns:
            True on success, False if storage failed (logged).
        """
        return self._write(self.save_key, state)

    def load(self) -> Optional[SaveState]:
        """Read the primary save; None if absent or unreadable (logged)."""
        return self._read(self.save_key)

    def save_checkpoint(self, state: SaveState) -> bool:
        """Write the pre-ending checkpoint.

        Returns:
            True on success, False if storage failed (logged).
        """
        return self._write(self.checkpoint_key, state)

    def load_checkpoint(self) -> Optional[SaveState]:
        """Read the checkpoint; None if absent or unreadable (logged)."""
        return self._read(self.checkpoint_key)

    def clear(self) -> bool:
        """Erase both the save and the checkpoint.

        Returns:
            True if both keys were removed.
        """
        ok = True
        for key in (self.save_key, self.checkpoint_key):
            try:
                self.store.delete(key)
            except PersistenceError as e:
                logger.warning(f"Failed to clear {key}: {e.message}")
                ok = False
        return ok

    def _write(self, key: str, state: SaveState) -> bool:
        try:
            self.store.set(key, state.to_json())
        except PersistenceError as e:
            logger.warning(f"Failed to save {key}: {e.message}")
            return False
        logger.debug(f"Saved {key}")
        return True

    def _read(self, key: str) -> Optional[SaveState]:
        try:
            raw = self.store.get(key)
        except PersistenceError as e:
            logger.warning(f"Failed to load {key}: {e.message}")
            return None

        if raw is None:
            return None

        try:
            return SaveState.from_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable data under {key}: {e}")
            return None
