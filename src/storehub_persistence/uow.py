"""
SQLAlchemy implementation of the Unit of Work pattern.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from storehub_core.ports.unit_of_work import UnitOfWork

from .exceptions import SessionManagementError, UnitOfWorkError, translate_error

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of Work over one self-managed AsyncSession.

    ```python
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with SQLAlchemyUnitOfWork(factory) as uow:
        uow.session.add(model)
    ```

    The session is created on enter and closed on exit. A clean exit commits;
    commit failures are rolled back and surface as ``PersistenceError``
    (``ConflictError`` for constraint and serialization failures).
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        """Get the active session. Raises if session not yet created."""
        if self._session is None:
            raise UnitOfWorkError(
                "Session not yet created. Ensure __aenter__ was called."
            )
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        """Create the session and begin a transaction."""
        try:
            self._session = self._session_factory()
            await self._session.begin()
        except SQLAlchemyError as e:
            raise SessionManagementError(f"Failed to initialize UoW: {e}") from e
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            if self._session is not None:
                await self._session.close()
                self._session = None

    async def commit(self) -> None:
        """Commit the current transaction."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            with contextlib.suppress(SQLAlchemyError):
                await self.rollback()
            raise translate_error(e) from e

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        try:
            if self.session.in_transaction():
                await self.session.rollback()
        except SQLAlchemyError as e:
            raise UnitOfWorkError(f"Failed to rollback transaction: {e}") from e
