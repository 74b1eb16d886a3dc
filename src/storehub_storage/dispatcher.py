"""CommandDispatcher — decode, route, execute and report one command message."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError
from typing_extensions import assert_never

from storehub_core.cqrs.commands import Action
from storehub_core.cqrs.results import GENERIC_ERROR_TEXT, ResultMessage
from storehub_core.domain.models import StoreData, StoreVersionData
from storehub_core.primitives.exceptions import (
    DeliveryError,
    ErrorKind,
    PersistenceError,
    StoreHubError,
    StoreNotFoundError,
    VersionNotFoundError,
)
from storehub_messaging.exceptions import MessagingSerializationError
from storehub_messaging.serialization import CommandSerializer

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from storehub_core.cqrs.commands import CommandMessage
    from storehub_core.domain.models import WireModel
    from storehub_core.ports.notifier import IResultNotifier

    from .service import StoreService

    RouteHandler = Callable[[CommandMessage, Any], Awaitable[ResultMessage]]

logger = logging.getLogger(__name__)

# Largest value a BIGINT primary key can hold.
MAX_ID = 2**63 - 1

STORE_CREATED = "Store created successfully"
VERSION_CREATED = "Store version created successfully"
STORE_DELETED = "Store deleted successfully"
VERSION_DELETED = "Store version deleted successfully"


def parse_id(raw: str) -> int | None:
    """Return the decimal id in *raw*, or None when it cannot name a stored row."""
    raw = raw.strip()
    if not raw.isascii() or not raw.isdigit():
        return None
    value = int(raw)
    if value > MAX_ID:
        return None
    return value


def _store_id(command: CommandMessage) -> int:
    store_id = parse_id(command.store_id)
    if store_id is None:
        raise StoreNotFoundError(command.store_id)
    return store_id


def _version_id(command: CommandMessage) -> int:
    version_id = parse_id(command.version_id)
    if version_id is None:
        raise VersionNotFoundError(command.version_id)
    return version_id


def error_text(exc: StoreHubError) -> str:
    """Text sent as ``{"error": ...}`` for a project exception."""
    kind = exc.kind
    match kind:
        case ErrorKind.NOT_FOUND | ErrorKind.PERMISSION_DENIED | ErrorKind.VALIDATION:
            return exc.message
        case ErrorKind.CONFLICT | ErrorKind.PERSISTENCE:
            return PersistenceError.default_message
        case ErrorKind.AUTHENTICATION | ErrorKind.DELIVERY | ErrorKind.INTERNAL:
            return GENERIC_ERROR_TEXT
        case _:
            assert_never(kind)


@dataclass(frozen=True)
class _Route:
    handler: RouteHandler
    payload: type[WireModel] | None = None


class CommandDispatcher:
    """
    Stateless handler of raw command bodies.

    Undecodable bodies, unknown actions and malformed payloads are logged and
    dropped without a reply. Everything else produces exactly one result
    delivery attempt; a failed delivery is logged and swallowed.
    """

    def __init__(
        self,
        service: StoreService,
        notifier: IResultNotifier,
        *,
        serializer: CommandSerializer | None = None,
    ) -> None:
        self._service = service
        self._notifier = notifier
        self._serializer = serializer or CommandSerializer()
        self._routes: dict[Action, _Route] = {
            Action.CREATE_STORE: _Route(self._create_store, StoreData),
            Action.CREATE_STORE_VERSION: _Route(
                self._create_store_version, StoreVersionData
            ),
            Action.DELETE_STORE: _Route(self._delete_store),
            Action.DELETE_STORE_VERSION: _Route(self._delete_store_version),
            Action.GET_STORE: _Route(self._get_store),
            Action.GET_STORE_HISTORY: _Route(self._get_store_history),
            Action.GET_STORE_VERSION: _Route(self._get_store_version),
        }
        missing = set(Action) - set(self._routes)
        if missing:
            raise ValueError(
                f"No route for actions: {sorted(a.value for a in missing)}"
            )

    async def handle(self, body: bytes) -> None:
        """Entry point given to the message consumer."""
        try:
            command = self._serializer.deserialize(body)
        except MessagingSerializationError as e:
            logger.warning("Dropping undecodable message: %s", e)
            return

        action = command.known_action
        if action is None:
            logger.warning(
                "Dropping message with unknown action %r",
                command.action,
                extra={"action": command.action},
            )
            return

        route = self._routes[action]
        payload = None
        if route.payload is not None:
            try:
                payload = route.payload.model_validate(command.data or {})
            except PydanticValidationError as e:
                logger.warning(
                    "Dropping %s message with malformed data: %s",
                    action.value,
                    e,
                    extra={"action": action.value, "login": command.user_login},
                )
                return

        result = await self._execute(action, route, command, payload)
        await self._deliver(action, result)

    async def _execute(
        self,
        action: Action,
        route: _Route,
        command: CommandMessage,
        payload: Any,
    ) -> ResultMessage:
        extra = {
            "action": action.value,
            "store_id": command.store_id or None,
            "version_id": command.version_id or None,
            "login": command.user_login or None,
        }
        try:
            return await route.handler(command, payload)
        except StoreHubError as e:
            logger.info(
                "%s failed: %s",
                action.value,
                e.message,
                extra={**extra, "error_kind": e.kind.value},
            )
            return ResultMessage.failure(error_text(e))
        except Exception:
            logger.exception(
                "%s failed unexpectedly",
                action.value,
                extra={**extra, "error_kind": ErrorKind.INTERNAL.value},
            )
            return ResultMessage.failure(GENERIC_ERROR_TEXT)

    async def _deliver(self, action: Action, result: ResultMessage) -> None:
        try:
            await self._notifier.notify(result)
        except DeliveryError as e:
            logger.error(
                "Failed to send %s result to the gateway: %s",
                action.value,
                e.message,
                extra={"action": action.value, "error_kind": e.kind.value},
            )

    # ── Routes ───────────────────────────────────────────────────

    async def _create_store(
        self, command: CommandMessage, data: StoreData
    ) -> ResultMessage:
        await self._service.create_store(data, command.user_login)
        return ResultMessage.success(STORE_CREATED)

    async def _create_store_version(
        self, command: CommandMessage, data: StoreVersionData
    ) -> ResultMessage:
        await self._service.create_version(
            data, _store_id(command), command.user_login
        )
        return ResultMessage.success(VERSION_CREATED)

    async def _delete_store(self, command: CommandMessage, _: None) -> ResultMessage:
        await self._service.delete_store(_store_id(command), command.user_login)
        return ResultMessage.success(STORE_DELETED)

    async def _delete_store_version(
        self, command: CommandMessage, _: None
    ) -> ResultMessage:
        await self._service.delete_version(
            _store_id(command), _version_id(command), command.user_login
        )
        return ResultMessage.success(VERSION_DELETED)

    async def _get_store(self, command: CommandMessage, _: None) -> ResultMessage:
        store = await self._service.get_store(_store_id(command))
        return ResultMessage.success("store", store.to_wire())

    async def _get_store_history(
        self, command: CommandMessage, _: None
    ) -> ResultMessage:
        history = await self._service.get_version_history(_store_id(command))
        return ResultMessage.success(
            "history", [version.to_wire() for version in history]
        )

    async def _get_store_version(
        self, command: CommandMessage, _: None
    ) -> ResultMessage:
        version = await self._service.get_version(
            _store_id(command), _version_id(command)
        )
        return ResultMessage.success("version", version.to_wire())
