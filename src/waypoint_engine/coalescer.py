"""Collect folders touched by file-system events and flush them in bursts.

Every insertion restarts a quiet-period timer; the flush runs once the
timer expires, however many events arrived before it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from waypoint_engine.vault.nodes import Node, parent_path

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 2.0

Flush = Callable[[list[str]], Awaitable[None]]


class ChangeCoalescer:
    """Debounced set of folder paths with pending changes."""

    def __init__(self, flush: Flush, delay: float = DEBOUNCE_SECONDS):
        self._flush = flush
        self.delay = delay
        self._pending: set[str] = set()
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> frozenset[str]:
        return frozenset(self._pending)

    def add(self, folder_path: str) -> None:
        self._pending.add(folder_path)
        self._schedule()

    def created(self, node: Node) -> None:
        self.add(parent_path(node.path))

    def deleted(self, path: str) -> None:
        self.add(parent_path(path))

    def renamed(self, node: Node, old_path: str) -> None:
        self._pending.add(parent_path(old_path))
        self.add(parent_path(node.path))

    def _schedule(self) -> None:
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self.drain())
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Flush failed: %s", task.exception())

    async def drain(self) -> list[str]:
        """Flush everything pending now; returns the drained folder paths."""
        drained = sorted(self._pending)
        self._pending = set()
        if drained:
            logger.debug("Flushing %d folder(s): %s", len(drained), ", ".join(drained))
            await self._flush(drained)
        return drained

    async def wait_idle(self) -> None:
        """Wait for in-flight flushes to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel the timer, let running flushes finish, then flush what is pending."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        await self.wait_idle()
        await self.drain()
