"""SQLAlchemyStoreRepository — version chain on an async SQLAlchemy engine."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from storehub_core.domain.models import Store, StoreVersion
from storehub_core.primitives.exceptions import (
    PermissionDeniedError,
    StoreNotFoundError,
)

from .exceptions import SQLAlchemyPersistenceError, translate_error
from .models import StoreModel, StoreVersionModel
from .uow import SQLAlchemyUnitOfWork

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from storehub_core.domain.models import StoreData, StoreVersionData

logger = logging.getLogger(__name__)


class SQLAlchemyStoreRepository:
    """
    Production implementation of ``IStoreRepository``.

    Each call opens its own unit of work. Isolation comes from the engine
    (``SERIALIZABLE``); the unique indexes on ``store_versions`` catch a
    losing writer on engines that do not serialize. Both surface as
    ``ConflictError``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @contextlib.asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with SQLAlchemyUnitOfWork(self._session_factory) as uow:
                yield uow.session
        except SQLAlchemyError as e:
            logger.warning("Transaction failed: %s", e)
            raise translate_error(e) from e
        except (OSError, asyncio.TimeoutError) as e:
            logger.warning("Storage unreachable: %s", e)
            raise SQLAlchemyPersistenceError() from e

    async def create_store(self, data: StoreData, creator_login: str) -> int:
        async with self._transaction() as session:
            store = StoreModel(
                name=data.name,
                address=data.address,
                creator_login=creator_login,
                owner_name=data.owner_name,
                opening_time=data.opening_time,
                closing_time=data.closing_time,
            )
            session.add(store)
            await session.flush()
            session.add(
                StoreVersionModel(
                    store_id=store.store_id,
                    version_number=1,
                    creator_login=creator_login,
                    owner_name=data.owner_name,
                    opening_time=data.opening_time,
                    closing_time=data.closing_time,
                    is_current=True,
                )
            )
            await session.flush()
            return store.store_id

    async def create_version(
        self, store_id: int, data: StoreVersionData, creator_login: str
    ) -> int:
        async with self._transaction() as session:
            current = await session.scalar(
                select(StoreVersionModel).where(
                    StoreVersionModel.store_id == store_id,
                    StoreVersionModel.is_current.is_(True),
                )
            )
            highest = await session.scalar(
                select(func.max(StoreVersionModel.version_number)).where(
                    StoreVersionModel.store_id == store_id
                )
            )
            if current is not None:
                current.is_current = False
                # The partial unique index forbids two current rows mid-flush.
                await session.flush()
            version = StoreVersionModel(
                store_id=store_id,
                version_number=(highest or 0) + 1,
                creator_login=creator_login,
                owner_name=data.owner_name,
                opening_time=data.opening_time,
                closing_time=data.closing_time,
                is_current=True,
            )
            session.add(version)
            await session.flush()
            return version.version_id

    async def delete_store(self, store_id: int) -> None:
        async with self._transaction() as session:
            await session.execute(
                delete(StoreVersionModel).where(StoreVersionModel.store_id == store_id)
            )
            await session.execute(
                delete(StoreModel).where(StoreModel.store_id == store_id)
            )

    async def delete_version(self, version_id: int) -> None:
        async with self._transaction() as session:
            await session.execute(
                delete(StoreVersionModel).where(
                    StoreVersionModel.version_id == version_id
                )
            )

    async def get_store(self, store_id: int) -> Store | None:
        async with self._transaction() as session:
            row = await session.get(StoreModel, store_id)
            if row is None:
                return None
            return Store.model_validate(row, from_attributes=True)

    async def get_version_history(self, store_id: int) -> list[StoreVersion]:
        async with self._transaction() as session:
            rows = await session.scalars(
                select(StoreVersionModel)
                .where(StoreVersionModel.store_id == store_id)
                .order_by(
                    StoreVersionModel.created_at.desc(),
                    StoreVersionModel.version_number.desc(),
                )
            )
            return [
                StoreVersion.model_validate(row, from_attributes=True) for row in rows
            ]

    async def get_version(self, version_id: int) -> StoreVersion | None:
        async with self._transaction() as session:
            row = await session.get(StoreVersionModel, version_id)
            if row is None:
                return None
            return StoreVersion.model_validate(row, from_attributes=True)

    async def get_store_version(
        self, store_id: int, version_id: int
    ) -> StoreVersion | None:
        async with self._transaction() as session:
            row = await session.scalar(
                select(StoreVersionModel).where(
                    StoreVersionModel.version_id == version_id,
                    StoreVersionModel.store_id == store_id,
                )
            )
            if row is None:
                return None
            return StoreVersion.model_validate(row, from_attributes=True)

    async def check_creator(self, store_id: int, login: str) -> None:
        async with self._transaction() as session:
            creator = await session.scalar(
                select(StoreModel.creator_login).where(StoreModel.store_id == store_id)
            )
        if creator is None:
            raise StoreNotFoundError(store_id)
        if creator != login:
            raise PermissionDeniedError()
