"""
Progress events emitted by the sleep workflow.

The workflow only produces these values; turning them into chat messages is
the job of whichever sink receives them. ``render()`` gives the exact text
posted to the channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Awaitable, Callable, Union


@dataclass(frozen=True, slots=True)
class Started:
    """Emitted immediately, before the workflow waits."""

    delay: timedelta

    def render(self) -> str:
        minutes = int(self.delay.total_seconds() // 60)
        return f"Everyone will be disconnected in {minutes} minutes"


@dataclass(frozen=True, slots=True)
class InvalidTarget:
    """The target guild is not in the gateway cache. Terminal."""

    guild_id: int

    def render(self) -> str:
        return f"Invalid server ID: {self.guild_id}"


@dataclass(frozen=True, slots=True)
class Disconnecting:
    """The guild resolved and member disconnects are about to start."""

    def render(self) -> str:
        return "Disconnecting everyone..."


@dataclass(frozen=True, slots=True)
class GuildError:
    """Listing the guild's members failed, so no member was touched."""

    error: BaseException

    def render(self) -> str:
        return f"Error disconnecting from server: {self.error}"


@dataclass(frozen=True, slots=True)
class MemberError:
    """Disconnecting a single member failed. The remaining members are still processed."""

    member_name: str
    error: BaseException

    def render(self) -> str:
        return f"Error disconnecting member {self.member_name}: {self.error}"


@dataclass(frozen=True, slots=True)
class Finished:
    """Emitted last in every run that got past guild resolution."""

    def render(self) -> str:
        return "Done!"


WorkflowEvent = Union[Started, InvalidTarget, Disconnecting, GuildError, MemberError, Finished]

EventSink = Callable[[WorkflowEvent], Awaitable[None]]
