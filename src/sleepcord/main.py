"""
Sleepcord
=========

Entry point for the Sleepcord Discord bot. Loads the bot token, builds the
py-cord client with its cogs and runs it until the gateway connection ends.
"""

import os
import sys
from pathlib import Path

def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. SLEEPCORD_HOME environment variable, if set.
    2. If running in a frozen/compiled context (e.g., PyInstaller), use the executable's directory.
    3. Otherwise, assume running from source and use the grandparent of this file's directory.
    """
    if env_home := os.getenv("SLEEPCORD_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]

BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
import discord
from dotenv import load_dotenv

from sleepcord.sleep.tasks import TaskRegistry
from sleepcord.util.logger import get_logger, handle_exception


logger = get_logger("main")

TOKEN_ENV_VAR = "DISCORD_TOKEN"


def load_environment() -> str:
    """Load environment variables and return the Discord bot token.

    Returns
    -------
    str
        Discord bot token extracted from the loaded environment.

    Raises
    ------
    SystemExit
        If the required ``DISCORD_TOKEN`` variable is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    token = os.getenv(TOKEN_ENV_VAR)
    if not token:
        logger.critical(f"'{TOKEN_ENV_VAR}' environment variable not set. Bot cannot start.")
        sys.exit(1)
    return token


def build_intents() -> discord.Intents:
    """Construct the intents Sleepcord needs.

    Message content is required to read text commands, members to list the
    whole guild and voice states to disconnect people from voice.
    """
    intents = discord.Intents.default()
    intents.message_content = True
    intents.guilds = True
    intents.messages = True
    intents.members = True
    intents.voice_states = True
    return intents


def load_cogs(discord_bot_instance: discord.Bot, tasks: TaskRegistry) -> None:
    """Register all cogs with the provided bot, sharing one task registry."""
    from sleepcord.bot.cogs import command_listener, events_listener

    events_listener.setup(discord_bot_instance, tasks)
    command_listener.setup(discord_bot_instance, tasks)

    logger.info("All cogs loaded successfully.")


def create_bot(tasks: TaskRegistry) -> discord.Bot:
    """Instantiate the Discord bot and register all cogs."""
    bot = discord.Bot(intents=build_intents())
    load_cogs(bot, tasks)
    return bot


async def start_bot(bot: discord.Bot, token: str) -> None:
    """Start the Discord bot and log around the connection lifetime."""
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    finally:
        logger.info("Discord bot start routine finished.")


async def shutdown_runtime(bot: discord.Bot | None, tasks: TaskRegistry) -> None:
    """Cancel in-flight commands and close the Discord connection."""
    try:
        await tasks.shutdown()
    except Exception as exc:
        logger.exception("Error while cancelling command tasks: %s", exc)

    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing the Discord client: %s", exc)

    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Bootstrap and run the bot, returning a process exit code."""
    token = load_environment()
    tasks = TaskRegistry()

    try:
        bot = create_bot(tasks)
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        return 1

    exit_code = 0
    try:
        await start_bot(bot, token)
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot, tasks)

    return exit_code


def main() -> int:
    """Entrypoint that runs the async runtime and returns the process exit code."""
    logger.info("Starting Sleepcord…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        return 1
    except Exception as exc:
        logger.critical("An unexpected error occurred while running the bot: %s", exc)
        return 1


if __name__ == "__main__":
    sys.excepthook = handle_exception
    sys.exit(main())
