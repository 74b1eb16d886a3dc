"""Tests for CommandDispatcher routing and result reporting."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest

from storage_helpers import RecordingNotifier, command_body
from storehub_core.adapters.memory import InMemoryStoreRepository
from storehub_core.cqrs.commands import Action
from storehub_core.primitives.exceptions import (
    ConflictError,
    DeliveryError,
    PersistenceError,
    VersionNotFoundError,
)
from storehub_storage import CommandDispatcher, StoreService
from storehub_storage.dispatcher import error_text, parse_id

if TYPE_CHECKING:
    from storehub_core.domain.models import StoreData, StoreVersionData


@pytest.mark.asyncio
async def test_create_and_read_store(
    dispatcher: CommandDispatcher,
    notifier: RecordingNotifier,
    store_data: StoreData,
) -> None:
    await dispatcher.handle(command_body(Action.CREATE_STORE, data=store_data))
    await dispatcher.handle(command_body(Action.GET_STORE, store_id="1"))

    created, fetched = notifier.sent
    assert created == {"message": "Store created successfully"}
    store = fetched["message"]
    assert store["storeId"] == 1
    assert store["name"] == store_data.name
    assert store["creatorLogin"] == "user1"
    assert store["openingTime"] == store_data.opening_time


@pytest.mark.asyncio
async def test_null_ids_in_payload(
    dispatcher: CommandDispatcher,
    notifier: RecordingNotifier,
    store_data: StoreData,
) -> None:
    await dispatcher.handle(command_body(Action.CREATE_STORE, data=store_data))
    await dispatcher.handle(
        b'{"action": "get_store", "storeId": "1", "versionId": null, '
        b'"userLogin": "user1", "data": null}'
    )

    assert len(notifier.sent) == 2
    assert notifier.sent[1]["message"]["storeId"] == 1


@pytest.mark.asyncio
async def test_version_commands(
    dispatcher: CommandDispatcher,
    notifier: RecordingNotifier,
    store_data: StoreData,
    version_data: StoreVersionData,
) -> None:
    await dispatcher.handle(command_body(Action.CREATE_STORE, data=store_data))
    await dispatcher.handle(
        command_body(
            Action.CREATE_STORE_VERSION, login="user2", store_id=1, data=version_data
        )
    )
    await dispatcher.handle(command_body(Action.GET_STORE_HISTORY, store_id=1))
    await dispatcher.handle(
        command_body(Action.GET_STORE_VERSION, store_id=1, version_id=2)
    )
    await dispatcher.handle(
        command_body(Action.DELETE_STORE_VERSION, store_id=1, version_id=2)
    )
    await dispatcher.handle(command_body(Action.DELETE_STORE, store_id=1))

    assert notifier.sent[1] == {"message": "Store version created successfully"}
    history = notifier.sent[2]["message"]
    assert [(v["versionNumber"], v["isCurrent"]) for v in history] == [
        (2, True),
        (1, False),
    ]
    assert notifier.sent[3]["message"]["creatorLogin"] == "user2"
    assert notifier.sent[4] == {"message": "Store version deleted successfully"}
    assert notifier.sent[5] == {"message": "Store deleted successfully"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("body", "error"),
    [
        (command_body(Action.GET_STORE, store_id="7"), "store not found"),
        (command_body(Action.GET_STORE, store_id="abc"), "store not found"),
        (
            command_body(Action.GET_STORE, store_id="99999999999999999999"),
            "store not found",
        ),
        (
            command_body(Action.GET_STORE_VERSION, store_id=1, version_id="9" * 20),
            "store version not found",
        ),
        (command_body(Action.GET_STORE_HISTORY, store_id=""), "store not found"),
        (
            command_body(Action.GET_STORE_VERSION, store_id=1, version_id="x"),
            "store version not found",
        ),
        (command_body(Action.DELETE_STORE, store_id=7), "store not found"),
    ],
)
async def test_not_found_results(
    dispatcher: CommandDispatcher,
    notifier: RecordingNotifier,
    body: bytes,
    error: str,
) -> None:
    await dispatcher.handle(body)
    assert notifier.sent == [{"error": error}]


@pytest.mark.asyncio
async def test_permission_denied_result(
    dispatcher: CommandDispatcher,
    notifier: RecordingNotifier,
    store_data: StoreData,
) -> None:
    await dispatcher.handle(command_body(Action.CREATE_STORE, data=store_data))
    await dispatcher.handle(
        command_body(Action.DELETE_STORE, login="user2", store_id=1)
    )
    assert notifier.sent[-1] == {"error": "user is not a store creator"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b'{"action": "rename_store", "userLogin": "user1"}',
        b'{"action": "create_store", "userLogin": "user1", "data": {"name": "x"}}',
        b'{"action": "create_store_version", "storeId": "1", "userLogin": "user1"}',
    ],
)
async def test_malformed_messages_are_dropped(
    dispatcher: CommandDispatcher, notifier: RecordingNotifier, body: bytes
) -> None:
    await dispatcher.handle(body)
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_persistence_failure_text(
    notifier: RecordingNotifier, store_data: StoreData
) -> None:
    repository = AsyncMock()
    repository.create_store.side_effect = PersistenceError("disk full")
    dispatcher = CommandDispatcher(StoreService(repository), notifier)

    await dispatcher.handle(command_body(Action.CREATE_STORE, data=store_data))

    assert notifier.sent == [{"error": "failed to persist changes"}]


@pytest.mark.asyncio
async def test_unexpected_failure_hides_details(
    notifier: RecordingNotifier,
) -> None:
    repository = AsyncMock()
    repository.get_store.side_effect = RuntimeError("connection string leaked")
    dispatcher = CommandDispatcher(StoreService(repository), notifier)

    await dispatcher.handle(command_body(Action.GET_STORE, store_id=1))

    assert notifier.sent == [{"error": "internal error"}]


@pytest.mark.asyncio
async def test_delivery_failure_is_swallowed(store_data: StoreData) -> None:
    repository = InMemoryStoreRepository()
    notifier = AsyncMock()
    notifier.notify.side_effect = DeliveryError("gateway down")
    dispatcher = CommandDispatcher(StoreService(repository), notifier)

    await dispatcher.handle(command_body(Action.CREATE_STORE, data=store_data))

    notifier.notify.assert_awaited_once()
    assert len(repository) == 1


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12", 12),
        (" 7 ", 7),
        ("", None),
        ("-1", None),
        ("1.5", None),
        ("١", None),
        ("9223372036854775807", 9223372036854775807),
        ("9223372036854775808", None),
        ("99999999999999999999", None),
    ],
)
def test_parse_id(raw: str, expected: int | None) -> None:
    assert parse_id(raw) == expected


def test_error_text_by_kind() -> None:
    assert error_text(VersionNotFoundError(3)) == "store version not found"
    assert error_text(ConflictError()) == "failed to persist changes"
    assert error_text(DeliveryError("secret host")) == "internal error"
