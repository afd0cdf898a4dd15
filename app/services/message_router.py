"""Inbound message routing through the per-user conversation state."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from app.interfaces.messaging_provider import MessagingProvider
from app.models.message import InboundMessage, UserID
from app.services.conversation_directory import ConversationDirectory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _UserLane:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    in_flight: int = 0


class MessageRouter:
    """Routes each inbound message to the user's current replier.

    Messages of the same user are processed one at a time in arrival order;
    at most ``max_concurrency`` messages are processed at once overall.
    """

    def __init__(
        self,
        conversations: ConversationDirectory,
        messaging_provider: MessagingProvider,
        *,
        max_concurrency: int = 64,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1.")
        self.conversations = conversations
        self.messaging_provider = messaging_provider
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._lanes: dict[UserID, _UserLane] = {}

    async def route_message(self, message: InboundMessage) -> str:
        """Process one message and send the reply back to its chat."""
        logger.info("[%s] %s", message.username or message.user_id, message.text)

        lane = self._lanes.get(message.user_id)
        if lane is None:
            lane = _UserLane()
            self._lanes[message.user_id] = lane
        lane.in_flight += 1
        try:
            async with lane.lock:
                async with self._semaphore:
                    response = self.reply(message)
                    await self._send(message.chat_id, response)
        finally:
            lane.in_flight -= 1
            if lane.in_flight == 0:
                self._lanes.pop(message.user_id, None)

        return response

    def reply(self, message: InboundMessage) -> str:
        """Run the user's replier and store or clear the follow-up state.

        Callers must not run this concurrently for the same user: lookup and
        save are separate steps, so interleaved calls can lose a pending
        conversation. route_message serializes per user for that reason.
        """
        replier = self.conversations.lookup(message.user_id)
        result = replier.reply(message)
        if result.next_replier is None:
            self.conversations.clear(message.user_id)
        else:
            self.conversations.save(message.user_id, result.next_replier)
            logger.debug(
                "User %s moved to %s",
                message.user_id,
                type(result.next_replier).__name__,
            )
        return result.text

    def active_lanes(self) -> int:
        """Return how many users currently have messages in flight."""
        return len(self._lanes)

    async def _send(self, chat_id: int, text: str) -> None:
        try:
            await self.messaging_provider.send_message(chat_id=chat_id, text=text)
        except Exception:
            logger.exception("Failed to send reply to chat %s", chat_id)
