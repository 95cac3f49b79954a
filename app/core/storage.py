"""Key-value storage backends and the collection store used by the CRUD layer.

Every entity collection lives under a single key as a JSON object mapping
``id -> record``, the same layout a browser's local storage would hold.
``LocalStore`` reads and rewrites whole collections; the backend underneath
is injected (``InMemoryStorage`` for tests, ``DatabaseStorage`` for a real
deployment).
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.config import settings
from app.database import Base, SessionLocal, engine
from app.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class StorageKeys:
    """Storage keys for every persisted collection and flag."""

    USERS = "blog_users"
    ARTICLES = "blog_articles"
    COMMENTS = "blog_comments"
    LIKES = "blog_likes"
    FOLLOWS = "blog_follows"
    TAGS = "blog_tags"
    INITIALIZED = "blog_initialized"
    CURRENT_USER = "devCommunityUser"


class KeyValueStorage(ABC):
    """String-to-string storage, modelled on the Web Storage API."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value or None when the key is absent."""

    @abstractmethod
    def set_items(self, items: Mapping[str, Optional[str]]) -> None:
        """Write several keys at once. A None value removes the key."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def remove_item(self, key: str) -> None:
        self.set_items({key: None})


class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage, lost when the process exits."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_items(self, items: Mapping[str, Optional[str]]) -> None:
        for key, value in items.items():
            if value is None:
                self._items.pop(key, None)
            else:
                self._items[key] = value

    def clear(self) -> None:
        self._items.clear()

    def keys(self):
        return list(self._items.keys())


class DatabaseStorage(KeyValueStorage):
    """Storage backed by the ``storage_entries`` table.

    ``set_items`` writes all keys in one SQL transaction.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            entry = db.get(StorageEntry, key)
            return entry.value if entry else None
        finally:
            db.close()

    def set_items(self, items: Mapping[str, Optional[str]]) -> None:
        db = self.session_factory()
        try:
            for key, value in items.items():
                entry = db.get(StorageEntry, key)
                if value is None:
                    if entry:
                        db.delete(entry)
                elif entry:
                    entry.value = value
                    db.add(entry)
                else:
                    db.add(StorageEntry(key=key, value=value))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def clear(self) -> None:
        db = self.session_factory()
        try:
            db.execute(delete(StorageEntry))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


class LocalStore:
    """Collection-level access to a ``KeyValueStorage``.

    Reads return a fresh snapshot on every call. Writes made inside
    ``transaction()`` are buffered and flushed together when the outermost
    block exits cleanly; an exception discards them. A re-entrant lock
    serializes read-modify-write cycles within the process.

    Storage errors never propagate: failed reads are logged and treated as an
    empty collection, failed writes are logged and dropped.
    """

    def __init__(self, backend: KeyValueStorage):
        self.backend = backend
        self._lock = threading.RLock()
        self._pending: Optional[Dict[str, Optional[str]]] = None
        self._depth = 0

    @contextmanager
    def transaction(self) -> Iterator["LocalStore"]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._pending = {}
            self._depth += 1
            try:
                yield self
            except Exception:
                if outermost:
                    self._pending = None
                raise
            finally:
                self._depth -= 1

            if outermost:
                pending, self._pending = self._pending, None
                if pending:
                    self._flush(pending)

    def _flush(self, pending: Dict[str, Optional[str]]) -> None:
        try:
            self.backend.set_items(pending)
        except Exception as e:
            logger.error(f"[STORAGE] Error saving keys {sorted(pending)}: {e}")

    # ----- Raw items -----
    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            if self._pending is not None and key in self._pending:
                return self._pending[key]
            try:
                return self.backend.get_item(key)
            except Exception as e:
                logger.error(f"[STORAGE] Error reading key {key}: {e}")
                return None

    def set_item(self, key: str, value: Optional[str]) -> None:
        with self.transaction():
            self._pending[key] = value

    def remove_item(self, key: str) -> None:
        self.set_item(key, None)

    # ----- JSON values -----
    def get_json(self, key: str) -> Any:
        raw = self.get_item(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.error(f"[STORAGE] Error reading key {key}: {e}")
            return None

    def set_json(self, key: str, value: Any) -> None:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"[STORAGE] Error saving key {key}: {e}")
            return
        self.set_item(key, raw)

    # ----- Collections -----
    def read_collection(self, key: str) -> Dict[str, Dict[str, Any]]:
        """Load the ``id -> record`` mapping stored under ``key``."""
        data = self.get_json(key)
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.error(f"[STORAGE] Error reading key {key}: expected a JSON object, got {type(data).__name__}")
            return {}
        return data

    def write_collection(self, key: str, records: Mapping[str, Dict[str, Any]]) -> None:
        """Overwrite the whole collection stored under ``key``."""
        self.set_json(key, dict(records))


_store: Optional[LocalStore] = None
_store_lock = threading.Lock()


def create_backend(backend_name: Optional[str] = None) -> KeyValueStorage:
    """Build the configured storage backend, creating tables when needed."""
    backend_name = (backend_name or settings.STORAGE_BACKEND).lower()
    if backend_name == "memory":
        return InMemoryStorage()
    if backend_name == "database":
        Base.metadata.create_all(bind=engine)
        return DatabaseStorage(SessionLocal)
    raise ValueError(f"Unknown STORAGE_BACKEND '{backend_name}', expected 'database' or 'memory'")


def get_store() -> LocalStore:
    """Return the process-wide store, seeding sample data on first use."""
    global _store
    with _store_lock:
        if _store is None:
            store = LocalStore(create_backend())
            if settings.SEED_SAMPLE_DATA:
                from app.services.seed import seed_sample_data

                seed_sample_data(store)
            _store = store
        return _store


__all__ = [
    "StorageKeys",
    "KeyValueStorage",
    "InMemoryStorage",
    "DatabaseStorage",
    "LocalStore",
    "create_backend",
    "get_store",
]
