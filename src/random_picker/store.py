"""
History and favorites of random definitions.

Both lists are kept in one record, loaded once at startup and written back
wholesale after every change so nothing is lost if the process is killed.

History:
- most recent first, no repetition (re-picking moves the entry to the front)
- capped at HISTORY_LIMIT entries, the oldest fall off

Favorites:
- no repetition, new ones are appended
- order can be adjusted by the user
"""

import json
import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from . import core
from .errors import PersistenceError

logger = logging.getLogger("random_picker.store")


@dataclass
class StoreRecord:
    """The persisted shape: two ordered lists of definition strings."""

    favorites: List[str] = field(default_factory=list)
    history: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {"favorites": list(self.favorites), "history": list(self.history)}

    @classmethod
    def from_dict(cls, data) -> "StoreRecord":
        if not isinstance(data, dict):
            raise ValueError("store record must be an object")

        record = cls()
        for key in ("favorites", "history"):
            entries = data.get(key, [])
            if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
                raise ValueError(f"'{key}' must be a list of strings")
            setattr(record, key, list(entries))
        return record


class JsonFilePersistence:
    """Reads and writes the store record as a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else core.STORE_PATH

    def load(self) -> StoreRecord:
        if not self.path.exists():
            return StoreRecord()
        try:
            with open(self.path, encoding="utf-8") as f:
                return StoreRecord.from_dict(json.load(f))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {self.path}: {e}") from e

    def save(self, record: StoreRecord) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(record.to_dict(), f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(f"Could not write {self.path}: {e}") from e


class MemoryPersistence:
    """Keeps the store record in memory. Useful for tests and embedding."""

    def __init__(self, record: Optional[StoreRecord] = None):
        self.record = record or StoreRecord()
        self.saves = 0

    def load(self) -> StoreRecord:
        return StoreRecord.from_dict(self.record.to_dict())

    def save(self, record: StoreRecord) -> None:
        self.record = StoreRecord.from_dict(record.to_dict())
        self.saves += 1


def _matching(entries: List[str], search: Optional[str]) -> Iterator[str]:
    for entry in entries:
        if not search or search in entry:
            yield entry


class PickerStore:
    """
    Owns the history and favorites lists and their persistence.

    Every mutation runs under one lock and ends with a synchronous flush.
    A failed flush raises PersistenceError but keeps the in-memory change.
    """

    def __init__(self, persistence=None, history_limit: Optional[int] = None):
        self.persistence = persistence or JsonFilePersistence()
        self.history_limit = core.HISTORY_LIMIT if history_limit is None else history_limit
        self._record = StoreRecord()
        self._lock = threading.Lock()

    @classmethod
    def load(cls, persistence=None, history_limit: Optional[int] = None) -> "PickerStore":
        """Create a store and fill it from persistence, starting empty on failure."""
        store = cls(persistence, history_limit)
        try:
            store._record = store.persistence.load()
        except PersistenceError as e:
            logger.warning("Starting with an empty store: %s", e.message)
        return store

    def flush(self) -> None:
        """Write the whole record to persistence."""
        try:
            self.persistence.save(self._record)
        except PersistenceError as e:
            logger.error("Store not saved: %s", e.message)
            raise
        logger.debug(
            "Saved %d favorites, %d history entries",
            len(self._record.favorites),
            len(self._record.history),
        )

    # =========================================================================
    # History
    # =========================================================================

    def add_history(self, definition: str) -> None:
        """Put a definition at the front of the history."""
        with self._lock:
            history = self._record.history
            if history and history[0] == definition:
                return

            if definition in history:
                history.remove(definition)
            history.insert(0, definition)
            # Also shrinks a history saved under a larger limit
            del history[self.history_limit:]

            self.flush()

    def history(self, search: Optional[str] = None) -> List[str]:
        """History entries, most recent first, optionally filtered by substring."""
        with self._lock:
            return list(_matching(self._record.history, search))

    # =========================================================================
    # Favorites
    # =========================================================================

    def add_favorite(self, definition: str) -> bool:
        """Append a definition to the favorites. Returns False if already there."""
        with self._lock:
            if definition in self._record.favorites:
                return False
            self._record.favorites.append(definition)
            self.flush()
            return True

    def remove_favorite(self, definition: str) -> bool:
        """Remove a definition from the favorites. Returns False if absent."""
        with self._lock:
            if definition not in self._record.favorites:
                return False
            self._record.favorites.remove(definition)
            self.flush()
            return True

    def move_favorite(self, definition: str, index: int) -> bool:
        """Move a favorite to a new position (clamped to the list bounds)."""
        with self._lock:
            favorites = self._record.favorites
            if definition not in favorites:
                return False
            favorites.remove(definition)
            index = max(0, min(index, len(favorites)))
            favorites.insert(index, definition)
            self.flush()
            return True

    def favorites(self, search: Optional[str] = None) -> List[str]:
        """Favorite entries in user order, optionally filtered by substring."""
        with self._lock:
            return list(_matching(self._record.favorites, search))

    def is_favorite(self, definition: str) -> bool:
        with self._lock:
            return definition in self._record.favorites
