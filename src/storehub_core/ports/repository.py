from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.models import Store, StoreData, StoreVersion, StoreVersionData


@runtime_checkable
class IStoreRepository(Protocol):
    """
    Port for the durable version-chain of stores.

    Every operation runs in its own serializable transaction; a failure
    part-way leaves nothing behind.

    Invariant: per store, at most one version is current and it carries the
    highest version number.

    Raises:
        ConflictError: a concurrent writer changed the version chain; the
            transaction was rolled back and may be retried.
        PersistenceError: storage unavailable or a constraint failed.
    """

    async def create_store(self, data: StoreData, creator_login: str) -> int:
        """Insert the store and its current version 1; return the store id."""
        ...

    async def create_version(
        self, store_id: int, data: StoreVersionData, creator_login: str
    ) -> int:
        """Append a version that becomes current; return the version id."""
        ...

    async def delete_store(self, store_id: int) -> None:
        """Delete every version of the store, then the store itself."""
        ...

    async def delete_version(self, version_id: int) -> None:
        """Delete exactly one version; other rows keep their markers."""
        ...

    async def get_store(self, store_id: int) -> Store | None: ...

    async def get_version_history(self, store_id: int) -> list[StoreVersion]:
        """Return versions of the store, newest creation time first."""
        ...

    async def get_version(self, version_id: int) -> StoreVersion | None: ...

    async def get_store_version(
        self, store_id: int, version_id: int
    ) -> StoreVersion | None:
        """Return the version only if it belongs to *store_id*."""
        ...

    async def check_creator(self, store_id: int, login: str) -> None:
        """
        Raises:
            PermissionDeniedError: *login* did not create the store.
        """
        ...
