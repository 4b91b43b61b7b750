"""
Repository Pattern - Key-value persistence substrate.

The stores persist whole collections as JSON blobs under flat string keys.
Backends only need get/set/remove by key, so a JSON file, an SQLite table
or an in-memory dict are interchangeable.
"""

import json
import logging
import os
import sqlite3
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, Generator, List, Optional, TypeVar

from ..config import Config
from ..exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageBackend(Enum):
    """Available storage backends."""
    JSON = "json"
    SQLITE = "sqlite"
    MEMORY = "memory"


class BaseRepository(ABC):
    """
    Abstract base class for key-value repositories.

    Values are strings holding JSON blobs. Implementations raise
    StorageError on any read or write failure.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get raw value for key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store raw value under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
        pass

    def load_json(self, key: str, default: Any = None) -> Any:
        """
        Read and decode the JSON blob stored under key.

        Args:
            key: Storage key
            default: Returned when the key is absent

        Returns:
            Decoded value or default
        """
        raw = self.get(key)
        if raw is None or raw == "":
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupted value under '{key}': {e}") from e

    def load_records(self, key: str, from_dict: Callable[[Dict[str, Any]], T]) -> List[T]:
        """
        Read a collection stored as a JSON list of objects.

        Raises:
            StorageError: If the blob is not a list of objects or a record
                          cannot be turned into an entity
        """
        records = self.load_json(key, default=[]) or []
        if not isinstance(records, list):
            raise StorageError(f"Expected a list under '{key}', got {type(records).__name__}")
        items = []
        for record in records:
            if not isinstance(record, dict):
                raise StorageError(f"Malformed record under '{key}': {record!r}")
            try:
                items.append(from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                raise StorageError(f"Malformed record under '{key}': {e!r}") from e
        return items

    def save_json(self, key: str, value: Any) -> None:
        """Encode value as JSON and store it under key."""
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot encode value for '{key}': {e}") from e
        self.set(key, raw)
        logger.debug("Persisted '%s' (%d bytes)", key, len(raw))


class MemoryRepository(BaseRepository):
    """In-process dict storage. Contents are lost on exit."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileRepository(BaseRepository):
    """
    All keys kept in a single UTF-8 JSON file.

    Every write rewrites the file atomically (temp file + rename), so a
    crash never leaves a half-written file behind.
    """

    def __init__(self, file_path: Optional[str] = None):
        """
        Initialize JSON file repository.

        Args:
            file_path: Path to the JSON file
        """
        self.file_path = Path(file_path or Config.STORAGE_FILE)
        self._lock = Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {self.file_path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected content in {self.file_path}")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        temp_file = f"{self.file_path}.{uuid.uuid4().hex[:8]}.tmp"
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_file, self.file_path)
        except OSError as e:
            if os.path.exists(temp_file):
                os.remove(temp_file)
            raise StorageError(f"Could not write {self.file_path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)


class SQLiteRepository(BaseRepository):
    """
    SQLite-backed key-value table.

    Each operation opens its own connection and commits immediately.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize SQLite repository.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path or Config.DB_FILE)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get database connection with context manager."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise StorageError(f"Could not open {self.db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"SQLite error on {self.db_path}: {e}") from e
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

    def get(self, key: str) -> Optional[str]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._get_connection() as conn:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def remove(self, key: str) -> None:
        with self._get_connection() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))


def create_repository(
    backend: StorageBackend = StorageBackend.JSON,
    path: Optional[str] = None,
) -> BaseRepository:
    """
    Create a repository for the given backend.

    Args:
        backend: Storage backend (or its string value)
        path: File path for the JSON file or SQLite database

    Returns:
        Repository instance
    """
    backend = StorageBackend(backend)
    if backend == StorageBackend.SQLITE:
        return SQLiteRepository(path)
    if backend == StorageBackend.MEMORY:
        return MemoryRepository()
    return JSONFileRepository(path)
