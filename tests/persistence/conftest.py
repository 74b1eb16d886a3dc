from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from storehub_persistence import Database, SQLAlchemyStoreRepository

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path


@pytest.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'storehub.db'}")
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def repository(database: Database) -> SQLAlchemyStoreRepository:
    return SQLAlchemyStoreRepository(database.session_factory)
