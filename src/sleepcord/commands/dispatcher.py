"""
Command dispatcher.

Routes a parsed command to its handler. Handlers only act through the
:class:`~sleepcord.bot.environment.Environment`, so the outcome of a command
is observable purely as messages sent and errors logged.
"""

from __future__ import annotations

from sleepcord.bot.environment import Environment
from sleepcord.datatypes.command_datatypes import Command, HelpCommand, PingCommand, SleepCommand
from sleepcord.datatypes.workflow_events import EventSink, WorkflowEvent
from sleepcord.sleep.workflow import run_sleep_workflow
from sleepcord.util.logger import get_logger

logger = get_logger("command_dispatcher")

HELP_LINES = (
    "!ping - Check that the bot is awake",
    "!sleep [minutes] - Disconnect everyone from voice after a delay (default 90 minutes)",
    "!help - Show this message",
)

PONG = "Pong!"


async def send_safely(env: Environment, text: str) -> None:
    """Send ``text`` and log any failure instead of raising it."""
    try:
        await env.send_message(text)
    except Exception as exc:
        env.log_error(f"Error sending message {text!r}: {exc}", exc)


def channel_sink(env: Environment) -> EventSink:
    """Build an event sink that posts each rendered workflow event to the environment's channel."""

    async def sink(event: WorkflowEvent) -> None:
        text = event.render()
        logger.info(f"[guild {env.guild_id}] {text}")
        await send_safely(env, text)

    return sink


async def run_command(command: Command, env: Environment) -> None:
    """Execute ``command`` against ``env`` and wait for it to finish.

    Sleep commands return only after the whole workflow, including its delay,
    has completed.
    """
    if isinstance(command, HelpCommand):
        await send_safely(env, "\n".join(HELP_LINES))
    elif isinstance(command, PingCommand):
        await send_safely(env, PONG)
    elif isinstance(command, SleepCommand):
        await run_sleep_workflow(env.gateway, env.guild_id, command.delay, channel_sink(env))
    else:
        raise TypeError(f"Unsupported command: {command!r}")
