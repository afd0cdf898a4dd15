"""Long-polling loop that feeds Telegram updates into the bot."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.providers.messaging.telegram_messaging import TelegramAPIError, TelegramMessagingProvider
from app.services.bot_service import BotService

logger = logging.getLogger(__name__)


class UpdatePoller:
    """Fetches updates with getUpdates and dispatches each one as its own task."""

    def __init__(
        self,
        telegram: TelegramMessagingProvider,
        bot_service: BotService,
        *,
        timeout_seconds: int = 60,
        retry_seconds: float = 5.0,
    ) -> None:
        self.telegram = telegram
        self.bot_service = bot_service
        self.timeout_seconds = timeout_seconds
        self.retry_seconds = retry_seconds
        self.offset: int | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._loop_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Check the bot credentials and start polling in the background."""
        me = await self.telegram.get_me()
        logger.info("Authorized on account %s", me.get("username"))
        self._loop_task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Stop polling and wait for dispatched updates to finish."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def run(self) -> None:
        while True:
            await self.poll_once()

    async def poll_once(self) -> int:
        """Fetch one batch of updates and dispatch it; returns the batch size."""
        try:
            updates = await self.telegram.get_updates(offset=self.offset, timeout=self.timeout_seconds)
        except TelegramAPIError:
            logger.exception("Polling for updates failed, retrying in %ss", self.retry_seconds)
            await asyncio.sleep(self.retry_seconds)
            return 0

        for update in updates:
            update_id = update.get("update_id")
            if isinstance(update_id, int):
                self.offset = update_id + 1
            task = asyncio.create_task(self._dispatch(update))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return len(updates)

    async def _dispatch(self, update: dict[str, Any]) -> None:
        try:
            await self.bot_service.handle_update(update)
        except ValueError:
            logger.warning("Skipping malformed update %s", update.get("update_id"), exc_info=True)
        except Exception:
            logger.exception("Failed to handle update %s", update.get("update_id"))
