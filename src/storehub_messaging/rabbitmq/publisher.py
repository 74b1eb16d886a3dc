"""RabbitMQPublisher — IMessagePublisher over the default exchange."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import aio_pika
from aio_pika.exceptions import AMQPError

from ..exceptions import MessagingError

if TYPE_CHECKING:
    from .connection import RabbitMQConnectionManager

logger = logging.getLogger(__name__)


class RabbitMQPublisher:
    """RabbitMQ adapter implementing IMessagePublisher.

    Publishes to the default exchange with the queue name as routing key, so
    a message lands directly in the named queue. The queue is declared on
    first use with the same flags the consumer uses.
    """

    def __init__(self, connection: RabbitMQConnectionManager) -> None:
        self._connection = connection

    async def publish(self, queue: str, body: bytes) -> None:
        """Publish *body* to *queue*.

        Raises:
            MessagingError: the broker is unreachable or rejected the message.
        """
        try:
            await self._connection.connect()
            await self._connection.declare_queue(queue)
            await self._connection.channel.default_exchange.publish(
                aio_pika.Message(
                    body=body,
                    content_type="application/json",
                    delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
                ),
                routing_key=queue,
                timeout=self._connection.timeout,
            )
        except MessagingError:
            raise
        except (AMQPError, ConnectionError, OSError, asyncio.TimeoutError) as e:
            logger.warning("Failed to publish to queue %s: %s", queue, e)
            raise MessagingError(str(e)) from e

    async def health_check(self) -> bool:
        """Return True if the connection is healthy."""
        return await self._connection.health_check()
