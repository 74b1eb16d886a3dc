"""CommandPublisher — turns validated requests into queued commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from storehub_core.cqrs.commands import CommandMessage
from storehub_core.primitives.exceptions import DeliveryError
from storehub_messaging.serialization import CommandSerializer

from .schemas import PUBLISH_FAILED_TEXT

if TYPE_CHECKING:
    from storehub_core.cqrs.commands import Action
    from storehub_core.domain.models import WireModel
    from storehub_core.ports.messaging import IMessagePublisher

logger = logging.getLogger(__name__)


class CommandPublisher:
    """Fire-and-forget: success means the broker accepted the message."""

    def __init__(
        self,
        publisher: IMessagePublisher,
        queue: str,
        *,
        serializer: CommandSerializer | None = None,
    ) -> None:
        self._publisher = publisher
        self._queue = queue
        self._serializer = serializer or CommandSerializer()

    async def send(
        self,
        action: Action,
        *,
        login: str,
        store_id: str = "",
        version_id: str = "",
        data: WireModel | None = None,
    ) -> None:
        """
        Raises:
            DeliveryError: the broker did not accept the command.
        """
        command = CommandMessage.build(
            action,
            user_login=login,
            store_id=store_id,
            version_id=version_id,
            data=data,
        )
        extra = {
            "action": action.value,
            "store_id": store_id or None,
            "version_id": version_id or None,
            "login": login,
        }
        try:
            await self._publisher.publish(
                self._queue, self._serializer.serialize(command)
            )
        except DeliveryError as e:
            logger.error(
                "Failed to publish a message: %s",
                e.message,
                extra={**extra, "error_kind": e.kind.value},
            )
            raise DeliveryError(PUBLISH_FAILED_TEXT) from e
        logger.info("Published %s", action.value, extra=extra)
