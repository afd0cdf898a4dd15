"""Test endpoints for validating bot flow."""

from fastapi import APIRouter, Depends

from app.api.deps import get_bot_service
from app.schemas.test_message import TestMessageRequest, TestMessageResponse
from app.services.bot_service import BotService

router = APIRouter()


@router.post("/test-message", response_model=TestMessageResponse)
async def test_message(
    payload: TestMessageRequest,
    bot_service: BotService = Depends(get_bot_service),
) -> TestMessageResponse:
    """Run one text message through the bot and return its reply."""
    result = await bot_service.handle_text(
        user_id=payload.user_id,
        chat_id=payload.chat_id,
        message=payload.message,
    )
    return TestMessageResponse(**result)
