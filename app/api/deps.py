"""Request dependencies shared by API routes."""

from fastapi import Request

from app.services.bot_service import BotService


def get_bot_service(request: Request) -> BotService:
    """Return the bot service wired at application startup."""
    return request.app.state.bot_service
