"""Tests for the engine options Database passes to SQLAlchemy."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from storehub_persistence import Database
from storehub_persistence import database as database_module


@pytest.fixture
def engine_factory(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    factory = MagicMock()
    monkeypatch.setattr(database_module, "create_async_engine", factory)
    return factory


def test_postgres_engine_bounds_pool_and_statements(engine_factory: MagicMock) -> None:
    Database(
        "postgresql+asyncpg://storehub:secret@db/storehub", timeout=3.0, pool_size=4
    )

    kwargs = engine_factory.call_args.kwargs
    assert kwargs["isolation_level"] == "SERIALIZABLE"
    assert kwargs["pool_size"] == 4
    assert kwargs["pool_timeout"] == 3.0
    assert kwargs["connect_args"] == {"timeout": 3.0, "command_timeout": 3.0}


def test_sqlite_engine_has_no_driver_timeouts(engine_factory: MagicMock) -> None:
    Database("sqlite+aiosqlite:///storehub.db", timeout=3.0)

    kwargs = engine_factory.call_args.kwargs
    assert kwargs["isolation_level"] == "SERIALIZABLE"
    assert "connect_args" not in kwargs
    assert "pool_size" not in kwargs
