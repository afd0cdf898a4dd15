"""Conversation repliers: the per-user command state machine.

A replier turns one inbound message into reply text and, optionally, the
replier that should handle the same user's next message.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.models.message import InboundMessage
from app.services.commands import (
    CREATE_NOTE,
    LIST_NOTES,
    Command,
    get_command,
    get_usage,
    malformed_arguments_text,
    parse_tags,
)
from app.services.note_store import NoteStore

logger = logging.getLogger(__name__)

NO_NOTES_FOUND = "No notes satisfy the search criteria! :("
ENTER_NOTE_BODY = "Please, enter the body of the new note!"
NOTE_CREATED = "Successfully added a new note! Hooray!"


@dataclass(frozen=True, slots=True)
class Reply:
    """Reply text plus the replier to keep for the user's next message."""

    text: str
    next_replier: Replier | None = None


class Replier(ABC):
    """Handles the next message of one user."""

    @abstractmethod
    def reply(self, message: InboundMessage) -> Reply:
        """Produce the reply and the follow-up state for ``message``."""
        raise NotImplementedError


@dataclass(slots=True)
class CommandReplier(Replier):
    """Default state: interprets the message as a fresh command."""

    store: NoteStore
    strict_arguments: bool = False

    def reply(self, message: InboundMessage) -> Reply:
        if not message.is_command:
            return Reply(text=get_usage())

        command = get_command(message.command)
        if command is None:
            return Reply(text=get_usage())

        tags = parse_tags(message.arguments)
        if tags is None:
            if self.strict_arguments:
                return Reply(text=malformed_arguments_text(command))
            tags = []

        if command is LIST_NOTES:
            result = self.store.query(tags)
            return Reply(text=result or NO_NOTES_FOUND)

        if command is CREATE_NOTE:
            logger.debug("User %s is expected to send a note body", message.user_id)
            return Reply(
                text=ENTER_NOTE_BODY,
                next_replier=AwaitingNoteBody(store=self.store, command=command, tags=tuple(tags)),
            )

        return Reply(text=get_usage())


@dataclass(slots=True)
class AwaitingNoteBody(Replier):
    """Pending state: the next message's raw text is the body of a new note."""

    store: NoteStore
    command: Command
    tags: tuple[str, ...] = ()

    def reply(self, message: InboundMessage) -> Reply:
        self.store.append(message.text, self.tags)
        logger.debug("Stored note for user %s with tags %s", message.user_id, list(self.tags))
        return Reply(text=NOTE_CREATED)
