"""RabbitMQConsumer — IMessageConsumer with auto-ack and bounded concurrency."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from aio_pika.abc import AbstractIncomingMessage, AbstractQueue

    from .connection import RabbitMQConnectionManager

logger = logging.getLogger(__name__)


class RabbitMQConsumer:
    """RabbitMQ adapter implementing IMessageConsumer.

    Messages are acknowledged by the broker on delivery (``no_ack``): a crash
    while handling loses the message. Handlers run as tasks, at most
    ``max_in_flight`` at a time; further deliveries wait for a free slot.

    The waiting deliveries are not bounded. Without acks the broker ignores
    ``prefetch_count`` and pushes the whole queue, so a slow handler lets the
    backlog grow in memory. ``backlog`` reports its current size.
    """

    def __init__(
        self,
        connection: RabbitMQConnectionManager,
        *,
        max_in_flight: int = 10,
    ) -> None:
        """Configure consumer.

        Args:
            connection: Shared connection manager.
            max_in_flight: Upper bound on concurrently running handlers.
        """
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be >= 1")
        self._connection = connection
        self._max_in_flight = max_in_flight
        self._slots = asyncio.Semaphore(max_in_flight)
        self._tasks: set[asyncio.Task[None]] = set()
        self._waiting = 0
        self._subscriptions: list[tuple[AbstractQueue, str]] = []

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    @property
    def backlog(self) -> int:
        """Deliveries received but still waiting for a handler slot."""
        return self._waiting

    async def subscribe(
        self,
        queue: str,
        handler: Callable[[bytes], Coroutine[Any, Any, None]],
    ) -> None:
        """Declare *queue* and start delivering raw bodies to *handler*."""
        await self._connection.connect()
        declared = await self._connection.declare_queue(queue)

        async def on_message(raw: AbstractIncomingMessage) -> None:
            self._waiting += 1
            try:
                await self._slots.acquire()
            finally:
                self._waiting -= 1
            task = asyncio.create_task(self._run(handler, raw.body))
            self._tasks.add(task)
            task.add_done_callback(self._release)

        tag = await declared.consume(on_message, no_ack=True)
        self._subscriptions.append((declared, tag))
        logger.info(
            "Consuming from queue %s (max_in_flight=%d)", queue, self._max_in_flight
        )

    async def _run(
        self,
        handler: Callable[[bytes], Coroutine[Any, Any, None]],
        body: bytes,
    ) -> None:
        try:
            await handler(body)
        except Exception:
            logger.exception("Message handler failed; message is lost")

    def _release(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        self._slots.release()

    async def close(self) -> None:
        """Stop consuming. Handlers already running are cancelled."""
        for queue, tag in self._subscriptions:
            await queue.cancel(tag)
        self._subscriptions.clear()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def health_check(self) -> bool:
        """Return True if the connection is healthy."""
        return await self._connection.health_check()
