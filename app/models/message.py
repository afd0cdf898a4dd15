"""Transport-neutral inbound chat message."""

from __future__ import annotations

from dataclasses import dataclass

UserID = int


def split_command(text: str, command_length: int) -> tuple[str, tuple[str, ...]]:
    """Split a command message into its name and argument tokens.

    ``command_length`` is the length of the leading ``/command[@bot]`` token.
    One separator character after the token is dropped and the remainder is
    split on single spaces, so repeated spaces produce empty tokens.
    """
    token = text[:command_length]
    name = token[1:] if token.startswith("/") else token
    name = name.split("@", 1)[0]

    remainder = text[command_length + 1 :]
    if not remainder:
        return name, ()
    return name, tuple(remainder.split(" "))


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """One message received from a chat user."""

    user_id: UserID
    chat_id: int
    text: str
    is_command: bool = False
    command: str = ""
    arguments: tuple[str, ...] = ()
    username: str | None = None

    @classmethod
    def from_text(
        cls,
        *,
        user_id: UserID,
        text: str,
        chat_id: int | None = None,
        username: str | None = None,
    ) -> InboundMessage:
        """Build a message from plain text, treating a leading ``/token`` as a command."""
        resolved_chat_id = user_id if chat_id is None else chat_id
        if not text.startswith("/") or len(text) < 2 or text[1] == " ":
            return cls(user_id=user_id, chat_id=resolved_chat_id, text=text, username=username)

        command_length = text.find(" ")
        if command_length == -1:
            command_length = len(text)
        command, arguments = split_command(text, command_length)
        return cls(
            user_id=user_id,
            chat_id=resolved_chat_id,
            text=text,
            is_command=True,
            command=command,
            arguments=arguments,
            username=username,
        )
