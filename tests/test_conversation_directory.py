"""Unit tests for pending conversation storage."""

from __future__ import annotations

import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

from app.models.message import InboundMessage
from app.services.commands import CREATE_NOTE
from app.services.conversation_directory import ConversationDirectory
from app.services.note_store import NoteStoreDirectory
from app.services.repliers import AwaitingNoteBody, CommandReplier


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class ConversationDirectoryTestCase(unittest.TestCase):
    """Covers default lookup, save/clear and expiry."""

    def setUp(self) -> None:
        self.note_stores = NoteStoreDirectory()
        self.clock = FakeClock()
        self.directory = ConversationDirectory(self.note_stores, ttl_seconds=60, clock=self.clock)

    def _pending(self, user_id: int) -> AwaitingNoteBody:
        return AwaitingNoteBody(store=self.note_stores.get(user_id), command=CREATE_NOTE, tags=("work",))

    def test_unknown_user_gets_default_replier_bound_to_their_store(self) -> None:
        replier = self.directory.lookup(5)

        self.assertIsInstance(replier, CommandReplier)
        self.assertIs(replier.store, self.note_stores.get(5))
        self.assertEqual(replier.store.query(["anything"]), "")
        self.assertEqual(self.directory.pending_count(), 0)

    def test_save_then_lookup_returns_pending_replier(self) -> None:
        pending = self._pending(5)
        self.directory.save(5, pending)

        self.assertIs(self.directory.lookup(5), pending)
        self.assertIsInstance(self.directory.lookup(6), CommandReplier)

    def test_save_overwrites_previous_pending_replier(self) -> None:
        self.directory.save(5, self._pending(5))
        newer = self._pending(5)
        self.directory.save(5, newer)

        self.assertIs(self.directory.lookup(5), newer)
        self.assertEqual(self.directory.pending_count(), 1)

    def test_clear_reverts_to_default_and_is_idempotent(self) -> None:
        self.directory.save(5, self._pending(5))

        self.directory.clear(5)
        self.directory.clear(5)
        self.directory.clear(99)

        self.assertIsInstance(self.directory.lookup(5), CommandReplier)
        self.assertEqual(self.directory.pending_count(), 0)

    def test_pending_conversation_expires_after_ttl(self) -> None:
        self.directory.save(5, self._pending(5))

        self.clock.now += 59
        self.assertIsInstance(self.directory.lookup(5), AwaitingNoteBody)

        self.clock.now += 1
        self.assertIsInstance(self.directory.lookup(5), CommandReplier)
        self.assertEqual(self.directory.pending_count(), 0)

    def test_zero_ttl_never_expires(self) -> None:
        directory = ConversationDirectory(self.note_stores, ttl_seconds=0, clock=self.clock)
        pending = self._pending(5)
        directory.save(5, pending)

        self.clock.now += 10**9

        self.assertIs(directory.lookup(5), pending)

    def test_negative_ttl_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ConversationDirectory(self.note_stores, ttl_seconds=-1)

    def test_default_replier_inherits_strict_argument_mode(self) -> None:
        directory = ConversationDirectory(self.note_stores, strict_arguments=True)
        message = InboundMessage.from_text(user_id=5, text="/listnotes work")

        result = directory.lookup(5).reply(message)

        self.assertTrue(result.text.startswith("Malformed arguments for /listnotes!"))

    def test_concurrent_access_for_many_users(self) -> None:
        workers = 8
        barrier = threading.Barrier(workers)

        def exercise(user_id: int) -> bool:
            barrier.wait()
            for _ in range(200):
                pending = self._pending(user_id)
                self.directory.save(user_id, pending)
                if self.directory.lookup(user_id) is not pending:
                    return False
                self.directory.clear(user_id)
            return isinstance(self.directory.lookup(user_id), CommandReplier)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(exercise, range(workers)))

        self.assertTrue(all(results))
        self.assertEqual(self.directory.pending_count(), 0)


if __name__ == "__main__":
    unittest.main()
