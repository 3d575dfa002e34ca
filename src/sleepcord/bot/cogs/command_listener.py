"""Command listener Cog for Sleepcord.

Parses every user-authored message and runs recognised ``!`` commands as
background tasks, so a long ``!sleep`` countdown never delays other commands.
"""

from __future__ import annotations

from typing import Callable, Optional

import discord
from discord.ext import commands

from sleepcord.bot.environment import DiscordEnvironment, Environment
from sleepcord.bot.gateway import DiscordGateway
from sleepcord.commands.dispatcher import run_command, send_safely
from sleepcord.commands.parser import parse_command
from sleepcord.configuration.app_configuration import AppConfig, app_config
from sleepcord.datatypes.command_datatypes import CommandParseError
from sleepcord.sleep.tasks import TaskRegistry
from sleepcord.util.logger import get_logger

logger = get_logger("command_listener_cog")

EnvironmentFactory = Callable[[discord.Message], Environment]


class CommandListenerCog(commands.Cog):
    """Cog that turns chat messages into command executions."""

    def __init__(
        self,
        discord_bot_instance,
        tasks: Optional[TaskRegistry] = None,
        *,
        config: AppConfig = app_config,
        environment_factory: Optional[EnvironmentFactory] = None,
    ):
        """
        Initialize the command listener cog.

        Parameters
        ----------
        discord_bot_instance:
            The Discord bot instance to attach this cog to.
        tasks:
            Registry that owns spawned command tasks; a private one is created if omitted.
        config:
            Application configuration providing the default sleep delay and target guild override.
        environment_factory:
            Builds the per-message environment. Defaults to a :class:`DiscordEnvironment`.
        """
        self.bot = discord_bot_instance
        self.gateway = DiscordGateway(discord_bot_instance)
        self.tasks = tasks if tasks is not None else TaskRegistry()
        self.config = config
        self.environment_factory = environment_factory or self._build_environment
        logger.info("Command listener cog loaded")

    def _build_environment(self, message: discord.Message) -> Environment:
        return DiscordEnvironment.from_message(self.gateway, message, self.config.target_guild_id)

    def _should_ignore(self, message: discord.Message) -> bool:
        """Messages written by this bot or any other bot are never treated as commands."""
        author = message.author
        return author == self.bot.user or bool(getattr(author, "bot", False))

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message):
        """
        Parse a message and schedule the command it contains.

        Messages without the ``!`` prefix are ignored silently. Malformed
        commands get a single ``Error: ...`` reply.
        """
        if self._should_ignore(message):
            return

        try:
            command = parse_command(message.content, default_delay=self.config.default_sleep_delay)
        except CommandParseError as exc:
            logger.debug(f"Rejected command from {message.author}: {exc}")
            await send_safely(self.environment_factory(message), f"Error: {exc}")
            return

        if command is None:
            return

        logger.info(f"{message.author} issued {command!r} in channel {message.channel.id}")
        env = self.environment_factory(message)
        self.tasks.spawn(
            run_command(command, env),
            name=f"sleepcord-{type(command).__name__}-{message.id}",
        )

    def cog_unload(self) -> None:
        cancelled = self.tasks.cancel_all()
        if cancelled:
            logger.info(f"Cancelled {cancelled} pending command task(s) on unload")


def setup(discord_bot_instance, tasks: Optional[TaskRegistry] = None) -> None:
    """Register the CommandListenerCog with the bot."""
    discord_bot_instance.add_cog(CommandListenerCog(discord_bot_instance, tasks))
