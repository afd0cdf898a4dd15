"""Bot service entrypoint that delegates routing to MessageRouter."""

from __future__ import annotations

import logging
from typing import Any

from app.core.settings import Settings
from app.interfaces.messaging_provider import MessagingProvider
from app.models.message import InboundMessage, UserID
from app.providers.messaging.mock_messaging import MockMessagingProvider
from app.providers.messaging.telegram_messaging import TelegramMessagingProvider
from app.schemas.telegram import TelegramUpdate
from app.services.conversation_directory import ConversationDirectory
from app.services.message_router import MessageRouter
from app.services.note_store import NoteStoreDirectory

logger = logging.getLogger(__name__)


class BotService:
    """Thin facade that forwards inbound messages to MessageRouter."""

    def __init__(
        self,
        messaging_provider: MessagingProvider,
        *,
        note_stores: NoteStoreDirectory | None = None,
        conversations: ConversationDirectory | None = None,
        max_concurrency: int = 64,
    ) -> None:
        self.messaging_provider = messaging_provider
        if note_stores is None:
            note_stores = conversations.note_stores if conversations is not None else NoteStoreDirectory()
        self.note_stores = note_stores
        self.conversations = conversations if conversations is not None else ConversationDirectory(note_stores)
        self.message_router = MessageRouter(
            conversations=self.conversations,
            messaging_provider=messaging_provider,
            max_concurrency=max_concurrency,
        )

    async def handle_message(self, message: InboundMessage) -> str:
        """Route one normalized message and return the reply text."""
        return await self.message_router.route_message(message)

    async def handle_update(self, payload: dict[str, Any] | TelegramUpdate) -> str | None:
        """Route one raw Telegram update; updates without a text message are skipped."""
        update = payload if isinstance(payload, TelegramUpdate) else TelegramUpdate.model_validate(payload)
        message = update.to_inbound()
        if message is None:
            logger.debug("Skipping update %s without a text message", update.update_id)
            return None
        return await self.handle_message(message)

    async def handle_text(
        self,
        *,
        user_id: UserID,
        message: str,
        chat_id: int | None = None,
    ) -> dict[str, Any]:
        """Compatibility adapter for the test endpoint payload format."""
        inbound = InboundMessage.from_text(user_id=user_id, chat_id=chat_id, text=message)
        response = await self.handle_message(inbound)
        return {"user_id": user_id, "response": response}


def build_messaging_provider(settings: Settings) -> MessagingProvider:
    """Create the outbound provider selected in settings."""
    if settings.messaging_provider == "telegram" or settings.polling_enabled:
        return TelegramMessagingProvider(
            settings.telegram_bot_token,
            api_url=settings.telegram_api_url,
        )
    return MockMessagingProvider()


def build_bot_service(settings: Settings, messaging_provider: MessagingProvider | None = None) -> BotService:
    """Wire the stores, conversation state and router once for the process."""
    note_stores = NoteStoreDirectory()
    conversations = ConversationDirectory(
        note_stores,
        ttl_seconds=settings.conversation_ttl_seconds,
        strict_arguments=settings.strict_tag_arguments,
    )
    return BotService(
        messaging_provider=messaging_provider or build_messaging_provider(settings),
        note_stores=note_stores,
        conversations=conversations,
        max_concurrency=settings.max_concurrent_messages,
    )
