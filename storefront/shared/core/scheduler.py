"""Delayed message delivery for timer-driven transitions."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeAlias

logger = logging.getLogger(__name__)

MessageSink: TypeAlias = Callable[[Any], Awaitable[Any]]


class TimerScheduler:
    """Delivers messages to a sink after a delay.

    Pending deliveries are plain asyncio tasks sleeping on the running loop, so
    nothing blocks while a delay is outstanding. `cancel_all()` is the teardown
    hook: a cancelled delivery never reaches the sink.
    """

    def __init__(self, sink: Optional[MessageSink] = None) -> None:
        self._sink = sink
        self._pending_tasks: set[asyncio.Task] = set()
        self._closed = False

    def bind(self, sink: MessageSink) -> None:
        self._sink = sink

    @property
    def pending(self) -> int:
        return len(self._pending_tasks)

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, delay: float, message: Any) -> Optional[asyncio.Task]:
        """Deliver `message` to the sink after `delay` seconds."""
        if self._closed:
            logger.debug(f"Scheduler closed, dropping {type(message).__name__}")
            return None
        if self._sink is None:
            raise RuntimeError("TimerScheduler has no sink bound")

        task = asyncio.create_task(self._deliver(delay, message))
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)
        logger.debug(f"Scheduled {type(message).__name__} in {delay:.3f}s")
        return task

    async def _deliver(self, delay: float, message: Any) -> None:
        await asyncio.sleep(delay)
        if self._closed:
            return
        try:
            await self._sink(message)
        except Exception:
            logger.exception(f"TimerScheduler: delivery of {type(message).__name__} failed")

    def cancel_all(self) -> int:
        """Cancel every pending delivery and refuse new ones."""
        self._closed = True
        cancelled = 0
        for task in list(self._pending_tasks):
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.info(f"TimerScheduler: cancelled {cancelled} pending delivery(ies)")
        return cancelled

    async def wait_until_idle(self, timeout: float = 30.0) -> bool:
        """Wait until no delivery is pending, including chained ones.

        Returns:
            True if the scheduler drained, False if the timeout was reached
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        while self._pending_tasks:
            remaining = timeout - (loop.time() - start_time)
            if remaining <= 0:
                logger.warning(f"TimerScheduler: Timeout with {len(self._pending_tasks)} pending")
                return False
            await asyncio.wait(list(self._pending_tasks), timeout=remaining)
            # A delivery may have scheduled the next step of its chain
            await asyncio.sleep(0)
        return True
