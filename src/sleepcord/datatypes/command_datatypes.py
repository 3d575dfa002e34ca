"""
Command types produced by the text command parser.

Each inbound ``!`` message parses into exactly one of these values. They are
consumed once by the dispatcher and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Union


class CommandParseError(Exception):
    """Raised when a ``!`` message is not a valid command.

    The exception text is the user-facing explanation sent back to the channel.
    """


@dataclass(frozen=True, slots=True)
class HelpCommand:
    """``!help``: list the available commands."""


@dataclass(frozen=True, slots=True)
class PingCommand:
    """``!ping``: liveness check answered with ``Pong!``."""


@dataclass(frozen=True, slots=True)
class SleepCommand:
    """``!sleep [minutes]``: disconnect everyone from voice after ``delay``.

    Attributes:
        delay: Time to wait before disconnecting. Never negative; zero means
            act right after one scheduling yield.
    """

    delay: timedelta

    def __post_init__(self) -> None:
        if self.delay < timedelta(0):
            raise ValueError(f"Sleep delay must not be negative: {self.delay}")


Command = Union[HelpCommand, PingCommand, SleepCommand]
