"""In-memory transport for tests and local wiring."""

from __future__ import annotations

from .bus import InMemoryMessageBus
from .consumer import InMemoryConsumer
from .publisher import InMemoryPublisher

__all__ = ["InMemoryConsumer", "InMemoryMessageBus", "InMemoryPublisher"]
