"""gateway.py
==========

Thin capability layer over the Discord client.

The sleep workflow and the command dispatcher only talk to a
:class:`GatewayClient`. :class:`DiscordGateway` backs it with a live py-cord
bot, while tests substitute an in-memory fake. The client is shared by every
in-flight command and is never mutated through this interface.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

import discord

from sleepcord.util.logger import get_logger

logger = get_logger("gateway")

DISCONNECT_REASON = "Sleep timer elapsed"


class GatewayClient(Protocol):
    """Operations the bot needs from the chat gateway."""

    def resolve_guild(self, guild_id: int) -> Optional[Any]:
        ...

    async def list_members(self, guild: Any) -> Sequence[Any]:
        ...

    async def disconnect_member(self, member: Any) -> None:
        ...

    async def send_message(self, channel_id: int, text: str) -> None:
        ...


class DiscordGateway:
    """:class:`GatewayClient` backed by a py-cord client."""

    def __init__(self, bot: discord.Client) -> None:
        self.bot = bot

    def resolve_guild(self, guild_id: int) -> Optional[discord.Guild]:
        """Look the guild up in the client's cache; ``None`` if the bot cannot see it."""
        return self.bot.get_guild(guild_id)

    async def list_members(self, guild: discord.Guild) -> list[discord.Member]:
        """Fetch every member of ``guild`` from the API, without paging limits."""
        members = await guild.fetch_members(limit=None).flatten()
        logger.debug(f"Fetched {len(members)} members from guild {guild.id}")
        return members

    async def disconnect_member(self, member: discord.Member) -> None:
        """Disconnect ``member`` from whatever voice channel they are in."""
        await member.move_to(None, reason=DISCONNECT_REASON)

    async def send_message(self, channel_id: int, text: str) -> None:
        """Send a plain text message, fetching the channel if it is not cached."""
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            channel = await self.bot.fetch_channel(channel_id)
        await channel.send(text)
