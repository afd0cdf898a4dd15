"""Telegram Bot API client used for both sending and polling."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.interfaces.messaging_provider import MessagingProvider

logger = logging.getLogger(__name__)


class TelegramAPIError(RuntimeError):
    """Raised when the Bot API rejects a call or cannot be reached."""


class TelegramMessagingProvider(MessagingProvider):
    """Talks to the Telegram Bot API over HTTPS."""

    def __init__(
        self,
        token: str | None,
        *,
        api_url: str = "https://api.telegram.org",
        request_timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise RuntimeError("TELEGRAM_BOT_TOKEN not configured")

        self.request_timeout = request_timeout
        self.client = httpx.AsyncClient(
            base_url=f"{api_url.rstrip('/')}/bot{token}/",
            timeout=request_timeout,
            transport=transport,
        )

    async def get_me(self) -> dict[str, Any]:
        """Return the bot's own user object."""
        return await self._call("getMe")

    async def get_updates(self, offset: int | None = None, timeout: int = 0) -> list[dict[str, Any]]:
        """Long-poll for updates newer than ``offset``."""
        params: dict[str, Any] = {"timeout": timeout}
        if offset is not None:
            params["offset"] = offset
        # The HTTP timeout has to outlast the long-poll window.
        result = await self._call("getUpdates", params, timeout=timeout + self.request_timeout)
        return list(result or [])

    async def send_message(self, chat_id: int, text: str) -> None:
        await self._call("sendMessage", {"chat_id": chat_id, "text": text})

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _call(self, method: str, payload: dict[str, Any] | None = None, *, timeout: float | None = None) -> Any:
        try:
            response = await self.client.post(
                method,
                json=payload or {},
                timeout=timeout if timeout is not None else self.request_timeout,
            )
        except httpx.HTTPError as exc:
            raise TelegramAPIError(f"Telegram call '{method}' failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TelegramAPIError(
                f"Telegram call '{method}' returned a non-JSON response (HTTP {response.status_code})."
            ) from exc

        if not isinstance(body, dict) or not body.get("ok"):
            description = body.get("description") if isinstance(body, dict) else None
            raise TelegramAPIError(
                f"Telegram call '{method}' failed (HTTP {response.status_code}): {description or 'unknown error'}"
            )
        return body.get("result")
