"""Mock messaging provider implementation."""

import logging

from app.interfaces.messaging_provider import MessagingProvider

logger = logging.getLogger(__name__)


class MockMessagingProvider(MessagingProvider):
    """Log-only sender for local testing."""

    async def send_message(self, chat_id: int, text: str) -> None:
        logger.info("[MockMessaging] -> chat=%s | text=%s", chat_id, text)
