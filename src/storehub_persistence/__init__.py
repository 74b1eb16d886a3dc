"""SQLAlchemy persistence for storehub stores and their version chain."""

from __future__ import annotations

from .database import Database
from .exceptions import (
    SQLAlchemyPersistenceError,
    SessionManagementError,
    UnitOfWorkError,
    translate_error,
)
from .models import Base, StoreModel, StoreVersionModel
from .repository import SQLAlchemyStoreRepository
from .uow import SQLAlchemyUnitOfWork

__all__ = [
    "Base",
    "Database",
    "SQLAlchemyPersistenceError",
    "SQLAlchemyStoreRepository",
    "SQLAlchemyUnitOfWork",
    "SessionManagementError",
    "StoreModel",
    "StoreVersionModel",
    "UnitOfWorkError",
    "translate_error",
]
