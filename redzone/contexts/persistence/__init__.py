"""
Persistence Context

Responsibilities:
- Stores string values under string keys
- Provides interchangeable backends (memory, JSON file, SQLite)
- Reports every backend failure as a single "unavailable" error

Owns: Storage backends and their on-disk formats
Never: Parses or validates the values it stores
"""

from redzone.contexts.persistence.adapters import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    SQLiteStore,
    open_store,
)
from redzone.contexts.persistence.exceptions import PersistenceUnavailableError

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "SQLiteStore",
    "open_store",
    "PersistenceUnavailableError",
]
