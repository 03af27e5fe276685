"""Key-value persistence for rates and bookings.

Values must be JSON-serializable. Every store raises PersistenceError on
failure; callers decide whether a failure is fatal (it never is for rate
ticks or bookings, see RateStore.tick and BookingService.submit).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any

from .errors import PersistenceError

logger = logging.getLogger(__name__)

RATES_KEY = "currentRates"
BOOKINGS_KEY = "bookings"


class KeyValueStore(ABC):
    """Contract for string-keyed JSON value stores."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default when absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. No-op if absent."""


class InMemoryStore(KeyValueStore):
    """Process-local store. Values are kept as JSON text so that unserializable
    values fail on write, exactly as they would against a real store."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            raw = self._data.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot serialize value for {key!r}: {e}") from e
        with self._lock:
            self._data[key] = raw

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data


class JsonFileStore(KeyValueStore):
    """One JSON file per key under a directory, written atomically.

    A corrupt file is moved aside to ``<key>.json.corrupt`` and read as absent.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._lock = Lock()

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise PersistenceError(f"Invalid store key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        with self._lock:
            try:
                with path.open("r", encoding="utf-8") as f:
                    return json.load(f)
            except FileNotFoundError:
                return default
            except json.JSONDecodeError as e:
                backup = path.with_suffix(".json.corrupt")
                logger.warning("Store file %s is corrupt, moved to %s: %s", path, backup, e)
                try:
                    os.replace(path, backup)
                except OSError as move_error:
                    logger.error("Failed to move corrupt store file %s: %s", path, move_error)
                return default
            except OSError as e:
                raise PersistenceError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot serialize value for {key!r}: {e}") from e

        with self._lock:
            try:
                self._dir.mkdir(parents=True, exist_ok=True)
                fd, temp_path = tempfile.mkstemp(suffix=".json.tmp", dir=str(self._dir), text=True)
            except OSError as e:
                raise PersistenceError(f"Failed to write {path}: {e}") from e
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(temp_path, path)
            except OSError as e:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
                raise PersistenceError(f"Failed to write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path(key)
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                raise PersistenceError(f"Failed to remove {path}: {e}") from e
