"""Bot command table, usage text and argument parsing."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

TAG_FLAG = "--tag"


@dataclass(frozen=True, slots=True)
class Command:
    """A chat command the bot understands."""

    name: str
    usage: str
    needs_body: bool = False


CREATE_NOTE = Command(name="createnote", usage="/createnote [--tag work,concentration]", needs_body=True)
LIST_NOTES = Command(name="listnotes", usage="/listnotes [--tag work]")

COMMANDS: dict[str, Command] = {command.name: command for command in (CREATE_NOTE, LIST_NOTES)}


def get_command(name: str) -> Command | None:
    """Return the registered command with this name, if any."""
    return COMMANDS.get(name)


def get_usage() -> str:
    """Return usage lines for every registered command."""
    lines = "\n".join(command.usage for command in COMMANDS.values())
    return f"Run one of\n\n{lines}\n\nto let the magic happen!\n"


def parse_tags(arguments: Sequence[str]) -> list[str] | None:
    """Parse ``--tag a,b,c`` into its tags.

    Returns an empty list when there are no arguments and ``None`` when the
    arguments have any shape other than exactly ``--tag <list>``.
    """
    if not arguments:
        return []
    if len(arguments) != 2 or arguments[0] != TAG_FLAG:
        return None
    return arguments[1].split(",")


def malformed_arguments_text(command: Command) -> str:
    """Reply used when strict argument checking rejects a command."""
    return (
        f"Malformed arguments for /{command.name}! Expected {TAG_FLAG} <comma,separated,list>.\n\n"
        f"{get_usage()}"
    )
