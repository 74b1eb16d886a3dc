"""StoreService — business preconditions in front of the version-chain repository."""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from storehub_core.primitives.exceptions import (
    ConflictError,
    PersistenceError,
    StoreNotFoundError,
    VersionNotFoundError,
)
from storehub_core.primitives.retry import RetryPolicy

if TYPE_CHECKING:
    from storehub_core.domain.models import (
        Store,
        StoreData,
        StoreVersion,
        StoreVersionData,
    )
    from storehub_core.ports.repository import IStoreRepository

logger = logging.getLogger(__name__)


class StoreService:
    """
    Checks existence and ownership, then delegates to the repository.

    Existence is always checked before permission, so a missing store is
    reported as not found to every caller. Version-chain conflicts in
    ``create_version`` are retried under ``retry_policy``; once attempts run
    out the caller gets a plain ``PersistenceError``.
    """

    def __init__(
        self,
        repository: IStoreRepository,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._repository = repository
        self._retry_policy = retry_policy or RetryPolicy()

    async def create_store(self, data: StoreData, login: str) -> int:
        store_id = await self._repository.create_store(data, login)
        logger.info(
            "Store %s created", store_id, extra={"store_id": store_id, "login": login}
        )
        return store_id

    async def create_version(
        self, data: StoreVersionData, store_id: int, login: str
    ) -> int:
        for attempt in itertools.count(1):
            if await self._repository.get_store(store_id) is None:
                raise StoreNotFoundError(store_id)
            try:
                version_id = await self._repository.create_version(
                    store_id, data, login
                )
            except ConflictError as exc:
                if not self._retry_policy.should_retry(attempt):
                    logger.warning(
                        "Giving up on version of store %s after %d conflicts",
                        store_id,
                        attempt,
                        extra={"store_id": store_id, "error_kind": exc.kind.value},
                    )
                    raise PersistenceError() from exc
                logger.info(
                    "Version chain conflict on store %s (attempt %d), retrying",
                    store_id,
                    attempt,
                    extra={"store_id": store_id},
                )
                await self._retry_policy.wait_before_retry(attempt)
                continue
            logger.info(
                "Version %s of store %s created",
                version_id,
                store_id,
                extra={"store_id": store_id, "version_id": version_id, "login": login},
            )
            return version_id
        raise AssertionError("unreachable")

    async def delete_store(self, store_id: int, login: str) -> None:
        if await self._repository.get_store(store_id) is None:
            raise StoreNotFoundError(store_id)
        await self._repository.check_creator(store_id, login)
        await self._repository.delete_store(store_id)
        logger.info(
            "Store %s deleted", store_id, extra={"store_id": store_id, "login": login}
        )

    async def delete_version(self, store_id: int, version_id: int, login: str) -> None:
        if await self._repository.get_store_version(store_id, version_id) is None:
            raise VersionNotFoundError(version_id)
        await self._repository.check_creator(store_id, login)
        await self._repository.delete_version(version_id)
        logger.info(
            "Version %s of store %s deleted",
            version_id,
            store_id,
            extra={"store_id": store_id, "version_id": version_id, "login": login},
        )

    async def get_store(self, store_id: int) -> Store:
        store = await self._repository.get_store(store_id)
        if store is None:
            raise StoreNotFoundError(store_id)
        return store

    async def get_version_history(self, store_id: int) -> list[StoreVersion]:
        history = await self._repository.get_version_history(store_id)
        if not history:
            raise StoreNotFoundError(store_id)
        return history

    async def get_version(self, store_id: int, version_id: int) -> StoreVersion:
        version = await self._repository.get_store_version(store_id, version_id)
        if version is None:
            raise VersionNotFoundError(version_id)
        return version
