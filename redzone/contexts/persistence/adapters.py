"""
Key-value storage backends.

Every backend maps string keys to string values and signals failure only
through PersistenceUnavailableError. There are no transactions and no atomicity
across keys.

Usage:
    from redzone.contexts.persistence import open_store

    store = open_store("json", Path("outs/redzone_store.json"))
    store.set("rz_brandName", "Redzone Recruiting")
    store.get("rz_brandName")
    # "Redzone Recruiting"
"""

import json
import os
import shutil
import sqlite3
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from redzone.contexts.persistence.exceptions import PersistenceUnavailableError
from redzone.contexts.persistence.logger import _log_debug, _log_warning
from redzone.utils.timestamp import now_ms


class KeyValueStore(ABC):
    """
    Abstract base for storage backends.

    Subclasses must implement get() and set(), and must convert any backend
    error into PersistenceUnavailableError.
    """

    name: str

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    def close(self) -> None:
        """Release backend resources. No-op unless overridden."""
        pass


class InMemoryStore(KeyValueStore):
    """
    Dict-backed store. Nothing survives the process.

    Setting available=False makes every call raise, which simulates storage
    that has been disabled.
    """

    name = "memory"

    def __init__(self, initial: Dict[str, str] = None, available: bool = True):
        self._data: Dict[str, str] = dict(initial or {})
        self.available = available

    def _check_available(self, key: str) -> None:
        if not self.available:
            raise PersistenceUnavailableError("In-memory store is disabled", key=key)

    def get(self, key: str) -> Optional[str]:
        self._check_available(key)
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check_available(key)
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object file ({key: value, ...}).

    The file is created on first write. Writes go to a temp file in the same
    directory which then replaces the original. A write over an unreadable file
    first moves that file aside (store.corrupt-<ms>.json), so nothing is lost.
    """

    name = "json"

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceUnavailableError(
                f"Could not read store file {self.path}", original_error=e
            )
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise PersistenceUnavailableError(
                f"Store file {self.path} is not a JSON object of strings"
            )
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except PersistenceUnavailableError as e:
            if not self.path.is_file():
                raise
            # Unreadable content cannot be merged; keep it aside and start a fresh file
            _log_warning(f"Unreadable store file {self.path}: {e.message}")
            self._set_aside(key)
            data = {}
        data[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                suffix=".json", dir=self.path.parent, text=True
            )
        except OSError as e:
            raise PersistenceUnavailableError(
                f"Could not write store file {self.path}", key=key, original_error=e
            )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            shutil.move(temp_path, self.path)
        except OSError as e:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise PersistenceUnavailableError(
                f"Could not write store file {self.path}", key=key, original_error=e
            )
        _log_debug(f"Wrote {key} ({len(value)} chars) to {self.path}")

    def _set_aside(self, key: str) -> Path:
        """Move an unreadable store file to <stem>.corrupt-<ms>.json next to it."""
        backup = self.path.with_name(f"{self.path.stem}.corrupt-{now_ms()}.json")
        try:
            shutil.move(str(self.path), str(backup))
        except OSError as e:
            raise PersistenceUnavailableError(
                f"Could not move unreadable store file {self.path} aside",
                key=key,
                original_error=e,
            )
        _log_warning(f"Moved unreadable store file to {backup}")
        return backup


class SQLiteStore(KeyValueStore):
    """
    Store backed by a single-table SQLite database.

    Schema:
        kv(key TEXT PRIMARY KEY, value TEXT NOT NULL)
    """

    name = "sqlite"

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(str(self.db_path))
            self.conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            self.conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceUnavailableError(
                f"Could not open database {self.db_path}", original_error=e
            )

    def get(self, key: str) -> Optional[str]:
        try:
            row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise PersistenceUnavailableError("Database read failed", key=key, original_error=e)
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            self.conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            raise PersistenceUnavailableError("Database write failed", key=key, original_error=e)

    def close(self) -> None:
        self.conn.close()


# --- Backend Factory ---


def open_store(backend: str, path: Path = None) -> KeyValueStore:
    """
    Get a storage backend instance.

    Args:
        backend: "memory", "json", or "sqlite"
        path: Store file for the json and sqlite backends

    Returns:
        KeyValueStore instance

    Raises:
        ValueError: If backend is unknown or path is missing for a file backend
        PersistenceUnavailableError: If the sqlite database cannot be opened
    """
    backend = backend.lower()

    if backend == "memory":
        return InMemoryStore()
    if path is None:
        raise ValueError(f"Backend '{backend}' requires a store path")
    if backend == "json":
        return JsonFileStore(path)
    elif backend == "sqlite":
        return SQLiteStore(path)
    else:
        raise ValueError(f"Unknown store backend: {backend}. Use 'memory', 'json', or 'sqlite'")
