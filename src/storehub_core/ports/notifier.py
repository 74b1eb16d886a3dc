from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..cqrs.results import ResultMessage


@runtime_checkable
class IResultNotifier(Protocol):
    """Port for delivering a result message back to the gateway."""

    async def notify(self, result: ResultMessage) -> None:
        """
        Deliver *result* once, best effort.

        Raises:
            DeliveryError: the receiver was unreachable or refused it.
        """
        ...
