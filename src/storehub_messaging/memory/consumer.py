"""InMemoryConsumer — IMessageConsumer with synchronous dispatch for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from .bus import InMemoryMessageBus


class InMemoryConsumer:
    """In-memory consumer that registers handlers on a shared bus.

    Use the same InMemoryMessageBus as InMemoryPublisher so that publish()
    triggers handlers synchronously in tests.
    """

    def __init__(self, bus: InMemoryMessageBus) -> None:
        """Requires a shared bus (typically from InMemoryPublisher.bus)."""
        self._bus = bus

    async def subscribe(
        self,
        queue: str,
        handler: Callable[[bytes], Coroutine[Any, Any, None]],
    ) -> None:
        """Register handler for the queue."""
        self._bus.register(queue, handler)

    async def close(self) -> None:
        return None
