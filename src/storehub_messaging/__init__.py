"""Message transport adapters for storehub — RabbitMQ and in-memory."""

from __future__ import annotations

from .exceptions import (
    MessagingConnectionError,
    MessagingError,
    MessagingSerializationError,
)
from .memory import InMemoryConsumer, InMemoryMessageBus, InMemoryPublisher
from .serialization import CommandSerializer

__all__ = [
    "CommandSerializer",
    "InMemoryConsumer",
    "InMemoryMessageBus",
    "InMemoryPublisher",
    "MessagingConnectionError",
    "MessagingError",
    "MessagingSerializationError",
]
