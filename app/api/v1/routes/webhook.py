"""Webhook endpoint for inbound Telegram updates."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_bot_service
from app.schemas.telegram import TelegramUpdate
from app.services.bot_service import BotService

router = APIRouter()


@router.post("/webhook/telegram")
async def receive_update(
    update: TelegramUpdate,
    bot_service: BotService = Depends(get_bot_service),
) -> dict[str, str]:
    """Receive one Telegram update and route it through the conversation state."""
    try:
        await bot_service.handle_update(update)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"status": "accepted"}
