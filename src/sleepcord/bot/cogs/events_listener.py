"""Event listener Cog for Sleepcord.

Handles bot lifecycle events. When ``sleep.on_ready`` is enabled it also
starts a sleep countdown for every guild once the gateway cache is ready,
writing the progress to the log because there is no channel to answer in.
"""

from __future__ import annotations

from typing import Optional

from discord.ext import commands

from sleepcord.bot.gateway import DiscordGateway
from sleepcord.configuration.app_configuration import AppConfig, app_config
from sleepcord.datatypes.workflow_events import EventSink, WorkflowEvent
from sleepcord.sleep.tasks import TaskRegistry
from sleepcord.sleep.workflow import run_sleep_workflow
from sleepcord.util.logger import get_logger

logger = get_logger("events_listener_cog")


def log_sink(guild_id: int) -> EventSink:
    """Event sink that writes rendered workflow events to the operator log."""

    async def sink(event: WorkflowEvent) -> None:
        logger.info(f"[guild {guild_id}] {event.render()}")

    return sink


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle handlers."""

    def __init__(
        self,
        discord_bot_instance,
        tasks: Optional[TaskRegistry] = None,
        *,
        config: AppConfig = app_config,
    ):
        self.bot = discord_bot_instance
        self.gateway = DiscordGateway(discord_bot_instance)
        self.tasks = tasks if tasks is not None else TaskRegistry()
        self.config = config
        self.ready_sleep_started = False
        logger.info("Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self):
        """Log the connection and, if configured, start the on-ready countdown once."""
        if self.bot.user:
            logger.info(f"Bot connected as {self.bot.user} (ID: {self.bot.user.id})")
        else:
            logger.warning("Bot partially connected, but user information not yet available.")

        logger.info(f"Visible guilds: {len(self.bot.guilds)}")

        if self.config.sleep_on_ready and not self.ready_sleep_started:
            self.ready_sleep_started = True
            self.start_ready_sleep()

    def start_ready_sleep(self) -> None:
        """Spawn one sleep workflow per cached guild using the default delay."""
        delay = self.config.default_sleep_delay
        for guild in self.bot.guilds:
            logger.info(f"Starting on-ready sleep for guild {guild.id} ({delay})")
            self.tasks.spawn(
                run_sleep_workflow(self.gateway, guild.id, delay, log_sink(guild.id)),
                name=f"sleepcord-ready-sleep-{guild.id}",
            )


def setup(discord_bot_instance, tasks: Optional[TaskRegistry] = None) -> None:
    """Register the EventsListenerCog with the bot."""
    discord_bot_instance.add_cog(EventsListenerCog(discord_bot_instance, tasks))
