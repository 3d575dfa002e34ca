"""tasks.py
========

Bookkeeping for command tasks running in the background.

Every command runs as its own asyncio task so a pending ``!sleep`` never
holds up the processing of other messages. The registry keeps a strong
reference to each task until it finishes, logs how it ended, and cancels
whatever is still pending when the bot shuts down.
"""

from __future__ import annotations

import asyncio
from typing import Any, Coroutine

from sleepcord.util.logger import get_logger

logger = get_logger("task_registry")


class TaskRegistry:
    """Owns the background tasks spawned for commands."""

    def __init__(self) -> None:
        self.pending: set[asyncio.Task[Any]] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        """Schedule ``coro`` on the running loop and track it until it completes."""
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self.pending.add(task)
        task.add_done_callback(self._on_done)
        logger.debug(f"Spawned task {name}")
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self.pending.discard(task)
        if task.cancelled():
            logger.info(f"Task {task.get_name()} cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Task {task.get_name()} failed: {exc}", exc_info=exc)
        else:
            logger.debug(f"Task {task.get_name()} finished")

    def cancel_all(self) -> int:
        """Request cancellation of every pending task and return how many were pending."""
        tasks = list(self.pending)
        for task in tasks:
            task.cancel()
        return len(tasks)

    async def shutdown(self) -> None:
        """Cancel pending tasks and wait until they have all unwound."""
        tasks = list(self.pending)
        if not tasks:
            return
        logger.info(f"Cancelling {len(tasks)} pending command task(s)")
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
