"""InMemoryPublisher — IMessagePublisher with assertion helpers for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..serialization import CommandSerializer
from .bus import InMemoryMessageBus

if TYPE_CHECKING:
    from storehub_core.cqrs.commands import CommandMessage


class InMemoryPublisher:
    """In-memory publisher that buffers messages for testing and optional sync dispatch.

    Pass a shared InMemoryMessageBus to connect with InMemoryConsumer so that
    publish() triggers subscribed handlers. published_commands() and
    assert_published() support test assertions.
    """

    def __init__(self, bus: InMemoryMessageBus | None = None) -> None:
        """If bus is None, a new bus is created (no consumer connection)."""
        self._bus = bus or InMemoryMessageBus()
        self._serializer = CommandSerializer()

    async def publish(self, queue: str, body: bytes) -> None:
        """Publish to the in-memory bus (and trigger any subscribed handlers)."""
        await self._bus.publish(queue, body)

    def get_published(self) -> list[tuple[str, bytes]]:
        """Return all (queue, body) published so far."""
        return self._bus.get_published()

    def published_commands(self, queue: str | None = None) -> list[CommandMessage]:
        """Decode every published body, optionally restricted to *queue*."""
        return [
            self._serializer.deserialize(body)
            for q, body in self.get_published()
            if queue is None or q == queue
        ]

    def assert_published(
        self,
        action: str,
        count: int = 1,
        queue: str | None = None,
    ) -> None:
        """Assert that exactly `count` commands with this action were published.

        Optionally restrict to a specific queue. Raises AssertionError if not met.
        """
        commands = self.published_commands(queue)
        matching = [c for c in commands if c.action == action]
        assert len(matching) == count, (
            f"Expected {count} command(s) with action={action!r}, "
            f"got {len(matching)}. Published: {[c.action for c in commands]}"
        )

    async def health_check(self) -> bool:
        return True

    @property
    def bus(self) -> InMemoryMessageBus:
        """Return the bus (e.g. to pass to InMemoryConsumer)."""
        return self._bus
