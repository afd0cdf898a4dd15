"""Pending conversation storage, one replier per user."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from app.core.rwlock import ReadWriteLock
from app.models.message import UserID
from app.services.note_store import NoteStoreDirectory
from app.services.repliers import CommandReplier, Replier

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PendingConversation:
    """A replier waiting for the user's next message."""

    replier: Replier
    saved_at: float


class ConversationDirectory:
    """Tracks the pending replier of every user in RAM.

    Users without a pending replier, or whose pending replier is older than
    ``ttl_seconds``, get a fresh CommandReplier. A ``ttl_seconds`` of 0
    keeps pending conversations forever.
    """

    def __init__(
        self,
        note_stores: NoteStoreDirectory,
        *,
        ttl_seconds: float = 0,
        strict_arguments: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative.")
        self.note_stores = note_stores
        self.ttl_seconds = ttl_seconds
        self.strict_arguments = strict_arguments
        self._clock = clock
        self._pending: dict[UserID, PendingConversation] = {}
        self._lock = ReadWriteLock()

    def lookup(self, user_id: UserID) -> Replier:
        """Return the user's pending replier, or the default command replier."""
        with self._lock.read_locked():
            pending = self._pending.get(user_id)

        if pending is not None:
            if not self._is_expired(pending):
                return pending.replier
            self._expire(user_id, pending)

        return CommandReplier(
            store=self.note_stores.get(user_id),
            strict_arguments=self.strict_arguments,
        )

    def save(self, user_id: UserID, replier: Replier) -> None:
        """Keep ``replier`` for the user's next message, replacing any previous one."""
        with self._lock.write_locked():
            self._pending[user_id] = PendingConversation(replier=replier, saved_at=self._clock())

    def clear(self, user_id: UserID) -> None:
        """Drop the user's pending replier, if any."""
        with self._lock.write_locked():
            self._pending.pop(user_id, None)

    def pending_count(self) -> int:
        """Return how many users currently have a pending conversation."""
        with self._lock.read_locked():
            return len(self._pending)

    def _is_expired(self, pending: PendingConversation) -> bool:
        if not self.ttl_seconds:
            return False
        return self._clock() - pending.saved_at >= self.ttl_seconds

    def _expire(self, user_id: UserID, pending: PendingConversation) -> None:
        with self._lock.write_locked():
            # Only drop the entry we judged expired; a newer save wins.
            if self._pending.get(user_id) is pending:
                del self._pending[user_id]
                logger.info("Pending conversation of user %s expired", user_id)
