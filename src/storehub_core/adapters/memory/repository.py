"""InMemoryStoreRepository — dict-backed version chain for tests and local runs."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ...domain.models import Store, StoreVersion
from ...primitives.exceptions import (
    ConflictError,
    PermissionDeniedError,
    StoreNotFoundError,
)

if TYPE_CHECKING:
    from ...domain.models import StoreData, StoreVersionData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _StoreRow:
    store_id: int
    name: str
    address: str
    creator_login: str
    owner_name: str
    opening_time: str
    closing_time: str
    created_at: datetime


@dataclass(frozen=True)
class _VersionRow:
    version_id: int
    store_id: int
    version_number: int
    creator_login: str
    owner_name: str
    opening_time: str
    closing_time: str
    created_at: datetime
    is_current: bool


class InMemoryStoreRepository:
    """In-memory implementation of ``IStoreRepository``.

    Serializable isolation is emulated optimistically: ``create_version``
    snapshots the chain revision of the store, yields to the event loop, and
    refuses to commit with ``ConflictError`` when another writer bumped the
    revision in between.
    """

    def __init__(self) -> None:
        self._stores: dict[int, _StoreRow] = {}
        self._versions: dict[int, _VersionRow] = {}
        self._revisions: dict[int, int] = {}
        self._next_store_id = 1
        self._next_version_id = 1

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _chain(self, store_id: int) -> list[_VersionRow]:
        return [row for row in self._versions.values() if row.store_id == store_id]

    def _insert_version(
        self,
        store_id: int,
        number: int,
        data: StoreVersionData | StoreData,
        creator_login: str,
    ) -> int:
        version_id = self._next_version_id
        self._next_version_id += 1
        self._versions[version_id] = _VersionRow(
            version_id=version_id,
            store_id=store_id,
            version_number=number,
            creator_login=creator_login,
            owner_name=data.owner_name,
            opening_time=data.opening_time,
            closing_time=data.closing_time,
            created_at=self._now(),
            is_current=True,
        )
        self._revisions[store_id] = self._revisions.get(store_id, 0) + 1
        return version_id

    async def create_store(self, data: StoreData, creator_login: str) -> int:
        store_id = self._next_store_id
        self._next_store_id += 1
        self._stores[store_id] = _StoreRow(
            store_id=store_id,
            name=data.name,
            address=data.address,
            creator_login=creator_login,
            owner_name=data.owner_name,
            opening_time=data.opening_time,
            closing_time=data.closing_time,
            created_at=self._now(),
        )
        self._insert_version(store_id, 1, data, creator_login)
        return store_id

    async def create_version(
        self, store_id: int, data: StoreVersionData, creator_login: str
    ) -> int:
        revision = self._revisions.get(store_id, 0)
        chain = self._chain(store_id)
        current = next((row for row in chain if row.is_current), None)
        highest = max((row.version_number for row in chain), default=0)

        # Commit point: another writer may have run in the meantime.
        await asyncio.sleep(0)
        if self._revisions.get(store_id, 0) != revision:
            logger.debug("Version chain of store %s changed underneath", store_id)
            raise ConflictError()
        if store_id not in self._stores:
            raise StoreNotFoundError(store_id)

        if current is not None:
            self._versions[current.version_id] = replace(current, is_current=False)
        return self._insert_version(store_id, highest + 1, data, creator_login)

    async def delete_store(self, store_id: int) -> None:
        for row in self._chain(store_id):
            del self._versions[row.version_id]
        self._stores.pop(store_id, None)
        self._revisions.pop(store_id, None)

    async def delete_version(self, version_id: int) -> None:
        row = self._versions.pop(version_id, None)
        if row is not None:
            self._revisions[row.store_id] = self._revisions.get(row.store_id, 0) + 1

    async def get_store(self, store_id: int) -> Store | None:
        row = self._stores.get(store_id)
        if row is None:
            return None
        return Store(**vars(row))

    async def get_version_history(self, store_id: int) -> list[StoreVersion]:
        rows = sorted(
            self._chain(store_id),
            key=lambda row: (row.created_at, row.version_number),
            reverse=True,
        )
        return [StoreVersion(**vars(row)) for row in rows]

    async def get_version(self, version_id: int) -> StoreVersion | None:
        row = self._versions.get(version_id)
        if row is None:
            return None
        return StoreVersion(**vars(row))

    async def get_store_version(
        self, store_id: int, version_id: int
    ) -> StoreVersion | None:
        row = self._versions.get(version_id)
        if row is None or row.store_id != store_id:
            return None
        return StoreVersion(**vars(row))

    async def check_creator(self, store_id: int, login: str) -> None:
        row = self._stores.get(store_id)
        if row is None:
            raise StoreNotFoundError(store_id)
        if row.creator_login != login:
            raise PermissionDeniedError()

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._stores.clear()
        self._versions.clear()
        self._revisions.clear()

    def __len__(self) -> int:
        return len(self._stores)
