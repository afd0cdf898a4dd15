"""In-memory note storage, one append-only store per user."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from app.core.rwlock import ReadWriteLock
from app.models.message import UserID
from app.models.note import Note

logger = logging.getLogger(__name__)

NOTE_SEPARATOR = "\n\n"


class NoteStore:
    """Append-only list of notes for a single user."""

    def __init__(self) -> None:
        self._notes: list[Note] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def append(self, text: str, tags: Iterable[str] = ()) -> Note:
        """Store a new note at the end of the list."""
        note = Note(text=text, tags=frozenset(tags))
        with self._lock:
            self._notes.append(note)
        return note

    def query(self, tags: Iterable[str] = ()) -> str:
        """Return texts of notes carrying every tag in ``tags``, oldest first.

        An empty filter matches every note; no match yields an empty string.
        """
        wanted = frozenset(tags)
        with self._lock:
            notes = list(self._notes)
        return NOTE_SEPARATOR.join(note.text for note in notes if note.matches(wanted))


class NoteStoreDirectory:
    """Creates and caches one NoteStore per user."""

    def __init__(self) -> None:
        self._stores: dict[UserID, NoteStore] = {}
        self._lock = ReadWriteLock()

    def get(self, user_id: UserID) -> NoteStore:
        """Return the user's store, creating an empty one on first access."""
        with self._lock.read_locked():
            store = self._stores.get(user_id)
        if store is not None:
            return store

        with self._lock.write_locked():
            # Another caller may have created it between the two locks.
            store = self._stores.get(user_id)
            if store is None:
                store = NoteStore()
                self._stores[user_id] = store
                logger.debug("Created note store for user %s", user_id)
            return store

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._stores)
