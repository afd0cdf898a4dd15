"""Schemas for test message endpoint."""

from pydantic import BaseModel, Field


class TestMessageRequest(BaseModel):
    """Request body for /test-message."""

    user_id: int = Field(..., description="Sender identifier", examples=[42])
    chat_id: int | None = Field(default=None, description="Destination chat, defaults to the sender")
    message: str = Field(..., description="Inbound user message", examples=["/listnotes --tag work"])


class TestMessageResponse(BaseModel):
    """Response payload for /test-message."""

    user_id: int
    response: str
