"""StorageWorker — wires database, broker, dispatcher and callback together."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING

from storehub_core.primitives.retry import RetryPolicy, connect_with_retry
from storehub_messaging.rabbitmq import RabbitMQConnectionManager, RabbitMQConsumer
from storehub_persistence import Database, SQLAlchemyStoreRepository

from .dispatcher import CommandDispatcher
from .notifier import HttpResultNotifier
from .service import StoreService

if TYPE_CHECKING:
    from storehub_core.ports import (
        IMessageConsumer,
        IResultNotifier,
        IStoreRepository,
    )

    from .config import StorageSettings

logger = logging.getLogger(__name__)


class StorageWorker:
    """
    Lifecycle of the storage service.

    ``start()`` connects every dependency with bounded retries and subscribes
    the dispatcher to the command queue; ``stop()`` closes connections.
    Collaborators passed to the constructor are used as-is and never opened
    or closed by the worker.
    """

    def __init__(
        self,
        settings: StorageSettings,
        *,
        repository: IStoreRepository | None = None,
        consumer: IMessageConsumer | None = None,
        notifier: IResultNotifier | None = None,
    ) -> None:
        self.settings = settings
        self._repository = repository
        self._consumer = consumer
        self._notifier = notifier
        self._database: Database | None = None
        self._connection: RabbitMQConnectionManager | None = None
        self._owned_consumer: RabbitMQConsumer | None = None
        self._owned_notifier: HttpResultNotifier | None = None
        self.dispatcher: CommandDispatcher | None = None

    async def _open_repository(self) -> IStoreRepository:
        if self._repository is not None:
            return self._repository
        cfg = self.settings.database
        self._database = Database(
            cfg.url, pool_size=cfg.pool_size, timeout=cfg.timeout, echo=cfg.echo
        )
        await connect_with_retry(
            self._database.ping,
            attempts=cfg.connect_attempts,
            delay=cfg.connect_delay,
            name="database",
        )
        await self._database.create_schema()
        return SQLAlchemyStoreRepository(self._database.session_factory)

    async def _open_consumer(self) -> IMessageConsumer:
        if self._consumer is not None:
            return self._consumer
        cfg = self.settings.rabbitmq
        self._connection = RabbitMQConnectionManager(cfg.url, timeout=cfg.timeout)
        await connect_with_retry(
            self._connection.connect,
            attempts=cfg.connect_attempts,
            delay=cfg.connect_delay,
            name="rabbitmq",
        )
        self._owned_consumer = RabbitMQConsumer(
            self._connection, max_in_flight=cfg.max_in_flight
        )
        return self._owned_consumer

    def _open_notifier(self) -> IResultNotifier:
        if self._notifier is not None:
            return self._notifier
        cfg = self.settings.gateway
        self._owned_notifier = HttpResultNotifier(cfg.url, timeout=cfg.timeout)
        return self._owned_notifier

    async def start(self) -> None:
        repository = await self._open_repository()
        service = StoreService(
            repository,
            retry_policy=RetryPolicy(max_attempts=self.settings.conflict_retries),
        )
        self.dispatcher = CommandDispatcher(service, self._open_notifier())
        consumer = await self._open_consumer()
        await consumer.subscribe(self.settings.rabbitmq.queue, self.dispatcher.handle)
        logger.info("Waiting for messages on %s", self.settings.rabbitmq.queue)

    async def stop(self) -> None:
        if self._owned_consumer is not None:
            await self._owned_consumer.close()
            self._owned_consumer = None
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
        if self._owned_notifier is not None:
            await self._owned_notifier.aclose()
            self._owned_notifier = None
        if self._database is not None:
            await self._database.dispose()
            self._database = None
        logger.info("Storage worker stopped")

    async def run(self) -> None:
        """Start, block until SIGINT/SIGTERM, then stop."""
        stopping = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stopping.set)
        try:
            await self.start()
            await stopping.wait()
        finally:
            await self.stop()
