"""Ordered publish/subscribe between the state machine and the console.

Every subscription owns a queue drained by its own worker task, so a handler
sees the events of a topic strictly in publish order: a redraw for snapshot
N+1 never starts before the redraw for snapshot N has finished, even when a
handler awaits. Publishing never waits for handlers.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeAlias

EventPayload: TypeAlias = Dict[str, Any]
EventHandler: TypeAlias = Callable[[EventPayload], Awaitable[None]]

logger = logging.getLogger(__name__)


class _Subscription:
    def __init__(self, topic: str, handler: EventHandler) -> None:
        self.topic = topic
        self.handler = handler
        self.queue: asyncio.Queue[EventPayload] = asyncio.Queue()
        self.worker: Optional[asyncio.Task] = None
        self.closed = False

    @property
    def name(self) -> str:
        return getattr(self.handler, "__name__", type(self.handler).__name__)


class EventBus:
    """Topic hub shared by the state machine and its views."""

    def __init__(self) -> None:
        self._subscriptions: Dict[str, List[_Subscription]] = {}
        # Deliveries queued or running; nested publishes count before the outer one settles
        self._in_flight = 0
        self._idle = asyncio.Event()
        self._idle.set()

    async def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Register an async handler for a topic. Subscribing twice is a no-op."""
        subscriptions = self._subscriptions.setdefault(topic, [])
        if any(sub.handler == handler for sub in subscriptions):
            return
        sub = _Subscription(topic, handler)
        sub.worker = asyncio.create_task(self._drain(sub), name=f"bus:{topic}:{sub.name}")
        subscriptions.append(sub)
        logger.debug(f"Subscribed {sub.name} to '{topic}'")

    async def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        """Remove a handler; events still queued for it are dropped."""
        for sub in list(self._subscriptions.get(topic, [])):
            if sub.handler == handler:
                self._subscriptions[topic].remove(sub)
                self._stop(sub)

    async def publish(self, topic: str, payload: EventPayload) -> None:
        subscriptions = self._subscriptions.get(topic, [])
        if not subscriptions:
            logger.debug(f"No subscribers for topic '{topic}'")
            return

        for sub in subscriptions:
            self._in_flight += 1
            self._idle.clear()
            sub.queue.put_nowait(payload)

    async def wait_until_idle(self, timeout: float = 10.0) -> bool:
        """Wait until every queued delivery, including chained ones, has run.

        Returns:
            True if the bus drained, False if the timeout was reached
        """
        try:
            await asyncio.wait_for(self._idle.wait(), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"EventBus: timeout with {self._in_flight} delivery(ies) in flight")
            return False
        return True

    async def close(self) -> None:
        """Stop every worker; undelivered events are dropped."""
        for subscriptions in self._subscriptions.values():
            for sub in subscriptions:
                self._stop(sub)
        self._subscriptions.clear()

    async def _drain(self, sub: _Subscription) -> None:
        while not sub.closed:
            payload = await sub.queue.get()
            try:
                await sub.handler(payload)
            except Exception:
                logger.exception(f"EventBus handler error in '{sub.name}' for topic '{sub.topic}'")
            finally:
                self._settle(1)

    def _stop(self, sub: _Subscription) -> None:
        sub.closed = True
        self._settle(sub.queue.qsize())
        while not sub.queue.empty():
            sub.queue.get_nowait()
        # A handler may unsubscribe itself; its worker then exits after the current event
        if sub.worker is not None and sub.worker is not asyncio.current_task():
            sub.worker.cancel()

    def _settle(self, count: int) -> None:
        self._in_flight -= count
        if self._in_flight <= 0:
            self._in_flight = 0
            self._idle.set()
