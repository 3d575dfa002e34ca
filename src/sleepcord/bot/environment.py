"""
Per-invocation environment handed to command handlers.

An environment bundles the shared gateway with the channel and guild a single
command is about, plus an operator-facing error sink. It lives exactly as long
as the processing of one command.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import discord

from sleepcord.bot.gateway import GatewayClient
from sleepcord.util.logger import get_logger

logger = get_logger("environment")


class Environment(Protocol):
    """Capabilities a command handler may use."""

    gateway: GatewayClient
    channel_id: int
    guild_id: int

    async def send_message(self, text: str) -> None:
        ...

    def log_error(self, message: str, exc: Optional[BaseException] = None) -> None:
        ...


@dataclass(slots=True)
class DiscordEnvironment:
    """Environment that replies in the channel a Discord message came from.

    Attributes:
        gateway: Shared gateway used for every outbound call.
        channel_id: Channel that receives replies and workflow progress.
        guild_id: Guild targeted by ``!sleep``.
    """

    gateway: GatewayClient
    channel_id: int
    guild_id: int

    @classmethod
    def from_message(
        cls,
        gateway: GatewayClient,
        message: discord.Message,
        guild_override: Optional[int] = None,
    ) -> "DiscordEnvironment":
        """Build the environment for one inbound message.

        ``guild_override`` replaces the message's own guild as the target. A
        direct message without an override targets guild ``0``, which never
        resolves and is reported back as an invalid server.
        """
        if guild_override is not None:
            guild_id = guild_override
        elif message.guild is not None:
            guild_id = message.guild.id
        else:
            guild_id = 0
        return cls(gateway=gateway, channel_id=message.channel.id, guild_id=guild_id)

    async def send_message(self, text: str) -> None:
        await self.gateway.send_message(self.channel_id, text)

    def log_error(self, message: str, exc: Optional[BaseException] = None) -> None:
        logger.error(f"[channel {self.channel_id}] {message}", exc_info=exc)
