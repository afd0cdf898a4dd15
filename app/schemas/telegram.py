"""Schemas for Telegram Bot API updates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.models.message import InboundMessage, split_command


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    is_bot: bool = False
    username: str | None = None
    first_name: str | None = None


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    type: str | None = None


class TelegramEntity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    offset: int
    length: int


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message_id: int
    chat: TelegramChat
    from_user: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None
    entities: list[TelegramEntity] = Field(default_factory=list)

    def command_length(self) -> int | None:
        """Length of the leading bot command, when the message starts with one."""
        for entity in self.entities:
            if entity.type == "bot_command" and entity.offset == 0:
                return entity.length
        return None


class TelegramUpdate(BaseModel):
    """Subset of a Telegram update the bot cares about."""

    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: TelegramMessage | None = None

    def to_inbound(self) -> InboundMessage | None:
        """Normalize the update, or return None when it carries no text message."""
        message = self.message
        if message is None or message.text is None:
            return None
        if message.from_user is None:
            raise ValueError(f"Update {self.update_id} has a message without a sender.")

        common = {
            "user_id": message.from_user.id,
            "chat_id": message.chat.id,
            "text": message.text,
            "username": message.from_user.username,
        }
        command_length = message.command_length()
        if command_length is None:
            return InboundMessage(**common)

        command, arguments = split_command(message.text, command_length)
        return InboundMessage(**common, is_command=True, command=command, arguments=arguments)
