"""UnitOfWork — Abstract base class for the Unit of Work pattern."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class UnitOfWork(ABC):
    """
    Abstract base class for Unit of Work implementations.

    Used as an async context manager: a clean exit commits, an exception
    rolls back and propagates.

    Example:
        ```python
        async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
            uow.session.add(model)
        ```
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction. Must be implemented by subclasses."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the transaction. Must be implemented by subclasses."""
        ...

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()
