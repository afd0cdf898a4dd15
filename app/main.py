"""FastAPI entrypoint for the notes bot."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.router import api_router
from app.core.logging import setup_logging
from app.core.settings import Settings, settings as default_settings
from app.interfaces.messaging_provider import MessagingProvider
from app.providers.messaging.telegram_messaging import TelegramMessagingProvider
from app.services.bot_service import build_bot_service
from app.services.update_poller import UpdatePoller

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    messaging_provider: MessagingProvider | None = None,
) -> FastAPI:
    """Build the application; bot state is created once per app in the lifespan."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(settings.log_level)
        bot_service = build_bot_service(settings, messaging_provider=messaging_provider)
        app.state.bot_service = bot_service

        poller: UpdatePoller | None = None
        try:
            if settings.polling_enabled:
                if not isinstance(bot_service.messaging_provider, TelegramMessagingProvider):
                    raise RuntimeError("Polling requires the Telegram messaging provider.")
                poller = UpdatePoller(
                    bot_service.messaging_provider,
                    bot_service,
                    timeout_seconds=settings.polling_timeout_seconds,
                    retry_seconds=settings.polling_retry_seconds,
                )
                await poller.start()

            logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
            yield
        finally:
            if poller is not None:
                await poller.stop()
            if isinstance(bot_service.messaging_provider, TelegramMessagingProvider):
                await bot_service.messaging_provider.aclose()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

    @app.get("/")
    async def health_check() -> dict[str, str]:
        """Simple health endpoint to validate service status."""
        return {"status": "ok", "message": f"{settings.app_name} backend is running"}

    # Mount API v1 routes under /api/v1.
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
