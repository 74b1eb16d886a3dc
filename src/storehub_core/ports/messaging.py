from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from typing import Any


@runtime_checkable
class IMessagePublisher(Protocol):
    """
    Port for publishing raw message bodies to a named queue.

    Infrastructure packages provide concrete adapters.
    """

    async def publish(self, queue: str, body: bytes) -> None:
        """
        Publish *body* to *queue*.

        Raises:
            DeliveryError: the broker could not accept the message.
        """
        ...

    async def health_check(self) -> bool:
        """Return True while the broker connection is usable."""
        ...


@runtime_checkable
class IMessageConsumer(Protocol):
    """
    Port for consuming raw message bodies from a named queue.

    Delivery is at-least-once from the broker's point of view, with no
    ordering guarantee across producers.
    """

    async def subscribe(
        self,
        queue: str,
        handler: Callable[[bytes], Coroutine[Any, Any, None]],
    ) -> None:
        """
        Invoke *handler* for each message body received on *queue*.
        """
        ...
