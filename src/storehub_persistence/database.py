"""Database — async engine, session factory, schema bootstrap and health check."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .models import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and the session factory handed to repositories.

    Every connection runs at ``SERIALIZABLE`` isolation.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        timeout: float = 5.0,
        echo: bool = False,
    ) -> None:
        engine_kwargs: dict[str, Any] = {
            "echo": echo,
            "isolation_level": "SERIALIZABLE",
            "pool_pre_ping": True,
        }
        if url.startswith("postgresql"):
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["pool_timeout"] = timeout
            # asyncpg: connection setup and per-statement deadlines
            engine_kwargs["connect_args"] = {
                "timeout": timeout,
                "command_timeout": timeout,
            }
        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises when the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """Create missing tables and indexes. Existing ones are left alone."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.ping()
        except (SQLAlchemyError, OSError) as e:
            logger.error("DB health check failed: %s", e)
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
