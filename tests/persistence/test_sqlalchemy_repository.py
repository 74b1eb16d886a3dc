"""Tests for SQLAlchemyStoreRepository on a file-backed SQLite database."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from storehub_core.primitives.exceptions import (
    ConflictError,
    PermissionDeniedError,
    StoreNotFoundError,
)
from storehub_core.primitives.retry import RetryPolicy
from storehub_persistence import (
    SQLAlchemyPersistenceError,
    SQLAlchemyUnitOfWork,
    StoreVersionModel,
    translate_error,
)
from storehub_storage import StoreService

if TYPE_CHECKING:
    from storehub_core.domain.models import StoreData, StoreVersionData
    from storehub_persistence import Database, SQLAlchemyStoreRepository


@pytest.mark.asyncio
async def test_database_health_check(database: Database) -> None:
    assert await database.health_check() is True


@pytest.mark.asyncio
async def test_create_store_writes_first_version(
    repository: SQLAlchemyStoreRepository, store_data: StoreData
) -> None:
    store_id = await repository.create_store(store_data, "user1")

    store = await repository.get_store(store_id)
    assert store is not None
    assert store.name == store_data.name
    assert store.creator_login == "user1"
    history = await repository.get_version_history(store_id)
    assert [(v.version_number, v.is_current) for v in history] == [(1, True)]


@pytest.mark.asyncio
async def test_version_chain(
    repository: SQLAlchemyStoreRepository,
    store_data: StoreData,
    version_data: StoreVersionData,
) -> None:
    store_id = await repository.create_store(store_data, "user1")
    v2 = await repository.create_version(store_id, version_data, "user2")
    v3 = await repository.create_version(store_id, version_data, "user1")

    history = await repository.get_version_history(store_id)
    assert [(v.version_number, v.is_current) for v in history] == [
        (3, True),
        (2, False),
        (1, False),
    ]

    await repository.delete_version(v3)
    history = await repository.get_version_history(store_id)
    assert [v.is_current for v in history] == [False, False]

    v4 = await repository.create_version(store_id, version_data, "user1")
    latest = await repository.get_version(v4)
    assert latest is not None
    assert (latest.version_number, latest.is_current) == (4, True)

    second = await repository.get_version(v2)
    assert second is not None
    assert second.creator_login == "user2"
    assert second.owner_name == version_data.owner_name


@pytest.mark.asyncio
async def test_store_version_lookup_is_scoped_to_store(
    repository: SQLAlchemyStoreRepository, store_data: StoreData
) -> None:
    first = await repository.create_store(store_data, "user1")
    second = await repository.create_store(store_data, "user1")
    [version] = await repository.get_version_history(first)

    assert await repository.get_store_version(first, version.version_id) is not None
    assert await repository.get_store_version(second, version.version_id) is None
    assert await repository.get_version(version.version_id + 100) is None


@pytest.mark.asyncio
async def test_delete_store_removes_versions(
    repository: SQLAlchemyStoreRepository,
    store_data: StoreData,
    version_data: StoreVersionData,
) -> None:
    store_id = await repository.create_store(store_data, "user1")
    await repository.create_version(store_id, version_data, "user1")

    await repository.delete_store(store_id)

    assert await repository.get_store(store_id) is None
    assert await repository.get_version_history(store_id) == []


@pytest.mark.asyncio
async def test_check_creator(
    repository: SQLAlchemyStoreRepository, store_data: StoreData
) -> None:
    store_id = await repository.create_store(store_data, "user1")

    await repository.check_creator(store_id, "user1")
    with pytest.raises(PermissionDeniedError):
        await repository.check_creator(store_id, "user3")
    with pytest.raises(StoreNotFoundError):
        await repository.check_creator(store_id + 1, "user1")


def _version_row(store_id: int, number: int, *, current: bool) -> StoreVersionModel:
    return StoreVersionModel(
        store_id=store_id,
        version_number=number,
        creator_login="user1",
        owner_name="Holmes, Sherlock",
        opening_time="2024-01-01 09:00:00",
        closing_time="2024-01-01 18:00:00",
        is_current=current,
    )


@pytest.mark.asyncio
async def test_duplicate_version_number_is_a_conflict(
    database: Database,
    repository: SQLAlchemyStoreRepository,
    store_data: StoreData,
) -> None:
    store_id = await repository.create_store(store_data, "user1")

    with pytest.raises(ConflictError):
        async with SQLAlchemyUnitOfWork(database.session_factory) as uow:
            uow.session.add(_version_row(store_id, 1, current=False))


@pytest.mark.asyncio
async def test_second_current_version_is_a_conflict(
    database: Database,
    repository: SQLAlchemyStoreRepository,
    store_data: StoreData,
) -> None:
    store_id = await repository.create_store(store_data, "user1")

    with pytest.raises(ConflictError):
        async with SQLAlchemyUnitOfWork(database.session_factory) as uow:
            uow.session.add(_version_row(store_id, 2, current=True))

    history = await repository.get_version_history(store_id)
    assert [v.version_number for v in history] == [1]


@pytest.mark.asyncio
async def test_concurrent_versions_keep_chain_intact(
    repository: SQLAlchemyStoreRepository,
    store_data: StoreData,
    version_data: StoreVersionData,
) -> None:
    service = StoreService(
        repository,
        retry_policy=RetryPolicy(max_attempts=10, base_delay=0.01, max_delay=0.05),
    )
    store_id = await service.create_store(store_data, "user1")

    created = await asyncio.gather(
        *(service.create_version(version_data, store_id, "user1") for _ in range(3))
    )

    history = await repository.get_version_history(store_id)
    assert len(set(created)) == 3
    assert sorted(v.version_number for v in history) == [1, 2, 3, 4]
    assert [v.version_number for v in history if v.is_current] == [4]

class _DriverError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


class _SQLiteError(Exception):
    def __init__(self, errorname: str) -> None:
        super().__init__("database is locked")
        self.sqlite_errorname = errorname


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (IntegrityError("INSERT", {}, _DriverError("23505")), ConflictError),
        (DBAPIError("UPDATE", {}, _DriverError("40001")), ConflictError),
        (OperationalError("UPDATE", {}, _DriverError("40P01")), ConflictError),
        (
            OperationalError("SELECT", {}, _DriverError("08006")),
            SQLAlchemyPersistenceError,
        ),
        (OperationalError("UPDATE", {}, _SQLiteError("SQLITE_BUSY")), ConflictError),
        (
            OperationalError("SELECT", {}, _SQLiteError("SQLITE_CANTOPEN")),
            SQLAlchemyPersistenceError,
        ),
    ],
)
def test_translate_error(exc: Exception, expected: type[Exception]) -> None:
    translated = translate_error(exc)  # type: ignore[arg-type]
    assert type(translated) is expected
