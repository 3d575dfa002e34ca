"""
Text command parser.

Turns the raw content of a chat message into a :data:`Command`. The function
is pure so it can be tested without Discord.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from sleepcord.datatypes.command_datatypes import (
    Command,
    CommandParseError,
    HelpCommand,
    PingCommand,
    SleepCommand,
)

COMMAND_PREFIX = "!"

DEFAULT_SLEEP_DELAY = timedelta(minutes=90)


def _parse_minutes(raw: str) -> timedelta:
    # Plain ASCII digits only: no sign, no underscores, no other scripts' numerals
    if raw.isascii() and raw.isdigit():
        try:
            return timedelta(minutes=int(raw))
        except OverflowError:
            pass
    raise CommandParseError(f"Invalid !sleep delay: {raw}. Must be a number")


def parse_command(text: str, *, default_delay: timedelta = DEFAULT_SLEEP_DELAY) -> Optional[Command]:
    """Parse one message into a command.

    Parameters
    ----------
    text:
        Raw message content.
    default_delay:
        Delay used by a bare ``!sleep``.

    Returns
    -------
    Command | None
        The parsed command, or ``None`` when the message is not addressed to
        the bot (no ``!`` prefix).

    Raises
    ------
    CommandParseError
        For unknown commands, wrong argument counts and non-numeric delays.
    """
    trimmed = text.strip()
    if not trimmed.startswith(COMMAND_PREFIX):
        return None

    tokens = trimmed.split()
    name, args = tokens[0], tokens[1:]

    if name == "!help" and not args:
        return HelpCommand()
    if name == "!ping" and not args:
        return PingCommand()
    if name == "!sleep":
        if not args:
            return SleepCommand(delay=default_delay)
        if len(args) == 1:
            return SleepCommand(delay=_parse_minutes(args[0]))

    raise CommandParseError(f"Unknown command: {trimmed}")
