"""Gateway application factory.

Routes are registered explicitly. The lifespan connects the broker and the
auth provider (bounded retries, fatal when exhausted) and closes them on
shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from storehub_core.primitives.retry import connect_with_retry
from storehub_messaging.rabbitmq import RabbitMQConnectionManager, RabbitMQPublisher

from .auth import AuthProviderClient, AuthService, InMemoryUserRepository
from .errors import register_error_handlers
from .health import HealthRegistry
from .publisher import CommandPublisher
from .routes import auth, health, responses, stores

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from storehub_core.ports.messaging import IMessagePublisher

    from .config import GatewaySettings

logger = logging.getLogger(__name__)


def create_app(
    settings: GatewaySettings,
    *,
    publisher: IMessagePublisher | None = None,
    auth_provider: AuthProviderClient | None = None,
) -> FastAPI:
    """Build the gateway.

    *publisher* and *auth_provider* replace the RabbitMQ publisher and the
    HTTP token-service client; the app then neither connects nor closes them.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        connection: RabbitMQConnectionManager | None = None
        message_publisher = publisher
        if message_publisher is None:
            mq = settings.rabbitmq
            connection = RabbitMQConnectionManager(mq.url, timeout=mq.timeout)
            await connect_with_retry(
                connection.connect,
                attempts=mq.connect_attempts,
                delay=mq.connect_delay,
                name="rabbitmq",
            )
            message_publisher = RabbitMQPublisher(connection)

        provider = auth_provider
        owned_provider: AuthProviderClient | None = None
        if provider is None:
            cfg = settings.auth
            provider = owned_provider = AuthProviderClient(
                cfg.url,
                timeout=cfg.timeout,
                retry=cfg.retry,
                retry_delay=cfg.retry_delay,
            )
            await provider.ping_with_retry()

        registry = HealthRegistry()
        registry.register("rabbitmq", message_publisher.health_check)
        registry.register("auth_provider", provider.health_check)

        app.state.settings = settings
        app.state.auth_provider = provider
        app.state.auth_service = AuthService(
            provider, InMemoryUserRepository(settings.users)
        )
        app.state.command_publisher = CommandPublisher(
            message_publisher, settings.rabbitmq.queue
        )
        app.state.health = registry
        logger.info("Gateway started")
        try:
            yield
        finally:
            logger.info("Gateway shutting down")
            if owned_provider is not None:
                await owned_provider.aclose()
            if connection is not None:
                await connection.close()

    app = FastAPI(title="StoreHub Gateway", lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(auth.router)
    app.include_router(stores.router)
    app.include_router(responses.router)
    app.include_router(health.router)
    return app
