"""workflow.py
===========

Delayed bulk voice disconnect.

:func:`run_sleep_workflow` announces the countdown, waits without blocking
the event loop, then disconnects every member of the target guild one at a
time. Every failure is reported once through the event sink and processing
moves on; nothing is retried.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

from sleepcord.bot.gateway import GatewayClient
from sleepcord.datatypes.workflow_events import (
    Disconnecting,
    EventSink,
    Finished,
    GuildError,
    InvalidTarget,
    MemberError,
    Started,
)
from sleepcord.util.logger import get_logger

logger = get_logger("sleep_workflow")


def _member_name(member) -> str:
    return str(getattr(member, "display_name", None) or getattr(member, "name", None) or member)


async def disconnect_members(gateway: GatewayClient, guild, sink: EventSink) -> None:
    """Disconnect all members of ``guild`` from voice, reporting per-member failures.

    A failing member list is reported as :class:`GuildError` and no member is
    touched. A failing disconnect is reported as :class:`MemberError` and the
    loop continues with the next member.
    """
    try:
        members = await gateway.list_members(guild)
    except Exception as exc:
        logger.warning(f"Failed to list members of guild {getattr(guild, 'id', guild)}: {exc}")
        await sink(GuildError(exc))
        return

    for member in members:
        try:
            await gateway.disconnect_member(member)
        except Exception as exc:
            logger.debug(f"Failed to disconnect {_member_name(member)}: {exc}")
            await sink(MemberError(_member_name(member), exc))


async def run_sleep_workflow(
    gateway: GatewayClient,
    guild_id: int,
    delay: timedelta,
    sink: EventSink,
) -> None:
    """Wait for ``delay`` and then disconnect everyone in the guild from voice.

    Parameters
    ----------
    gateway:
        Shared gateway used to resolve the guild and reach its members.
    guild_id:
        Guild whose members are disconnected.
    delay:
        Time to wait before acting. Zero still yields to the event loop once.
    sink:
        Receives every progress event, in order.
    """
    await sink(Started(delay))
    logger.info(f"Sleep scheduled for guild {guild_id} in {delay}")

    await asyncio.sleep(delay.total_seconds())

    guild = gateway.resolve_guild(guild_id)
    if guild is None:
        logger.warning(f"Guild {guild_id} is not visible to the bot; sleep aborted")
        await sink(InvalidTarget(guild_id))
        return

    await sink(Disconnecting())
    await disconnect_members(gateway, guild, sink)
    await sink(Finished())
    logger.info(f"Sleep finished for guild {guild_id}")
