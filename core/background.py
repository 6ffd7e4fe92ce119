"""
Detached background work.

Memory extraction and summarization run after the reply has been computed and
must never block or fail the turn. Every coroutine scheduled here is wrapped so
that exceptions stop at the task boundary and are logged, not raised.
"""

import asyncio
from typing import Any, Coroutine, Set

from core.logging_config import get_logger

logger = get_logger(__name__)


class BackgroundTaskRunner:
    """
    Fire-and-forget task runner.

    Holds a strong reference to each running task (asyncio only keeps weak ones)
    until it finishes. ``drain()`` waits for everything currently scheduled,
    which tests and shutdown hooks use; nothing on the request path awaits it.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task:
        """Schedule a coroutine detached from the caller.

        Args:
            coro: Coroutine to run
            name: Task name, used in logs

        Returns:
            The scheduled task. Its failures are logged; a task cancelled
            before it started ends cancelled, which ``drain()`` tolerates.
        """
        task = asyncio.create_task(self._guard(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(lambda t: self._close_unstarted(t, coro, name))
        logger.debug("Background task scheduled", task=name, pending=len(self._tasks))
        return task

    async def _guard(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            logger.info("Background task cancelled", task=name)
        except Exception as e:
            logger.error("Background task failed", task=name, error=str(e), error_type=type(e).__name__)

    @staticmethod
    def _close_unstarted(task: asyncio.Task, coro: Coroutine[Any, Any, Any], name: str) -> None:
        # Cancelled before its first step: _guard never awaited the work
        if task.cancelled():
            coro.close()
            logger.info("Background task cancelled before start", task=name)

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for all scheduled tasks to finish, including cancelled ones."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        """Abandon pending work, e.g. on process shutdown. Best-effort records are lost."""
        for task in list(self._tasks):
            task.cancel()
