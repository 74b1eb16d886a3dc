"""In-memory message bus for testing — connects publisher and consumer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine


class InMemoryMessageBus:
    """Shared bus: publish appends bodies and
    synchronously invokes registered handlers."""

    def __init__(self) -> None:
        self._messages: list[tuple[str, bytes]] = []
        self._handlers: dict[
            str, list[Callable[[bytes], Coroutine[Any, Any, None]]]
        ] = {}

    def register(
        self,
        queue: str,
        handler: Callable[[bytes], Coroutine[Any, Any, None]],
    ) -> None:
        """Register a handler for the queue."""
        self._handlers.setdefault(queue, []).append(handler)

    async def publish(self, queue: str, body: bytes) -> None:
        """Append body and invoke all handlers for the queue."""
        self._messages.append((queue, body))
        for h in self._handlers.get(queue, []):
            await h(body)

    def get_published(self) -> list[tuple[str, bytes]]:
        """Return all published (queue, body) pairs in order."""
        return list(self._messages)

    def clear(self) -> None:
        """Clear published messages and handlers (for test teardown)."""
        self._messages.clear()
        self._handlers.clear()
