"""Exceptions for the SQLAlchemy persistence layer."""

from __future__ import annotations

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from storehub_core.primitives.exceptions import ConflictError, PersistenceError

# serialization_failure, deadlock_detected
SERIALIZATION_FAILURE_CODES = frozenset({"40001", "40P01"})


class SQLAlchemyPersistenceError(PersistenceError):
    """Base exception for all SQLAlchemy-specific persistence errors."""


class SessionManagementError(SQLAlchemyPersistenceError):
    """Raised when session creation or management fails."""


class UnitOfWorkError(SQLAlchemyPersistenceError):
    """Raised when Unit of Work operations fail."""


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _sqlite_busy(exc: DBAPIError) -> bool:
    # "database is locked": another connection holds the write lock
    name = getattr(exc.orig, "sqlite_errorname", None) or ""
    return name.startswith("SQLITE_BUSY")


def translate_error(exc: SQLAlchemyError) -> PersistenceError:
    """Map a driver error to ConflictError when retrying can help."""
    if isinstance(exc, IntegrityError):
        return ConflictError()
    if isinstance(exc, DBAPIError) and _sqlstate(exc) in SERIALIZATION_FAILURE_CODES:
        return ConflictError()
    if isinstance(exc, DBAPIError) and _sqlite_busy(exc):
        return ConflictError()
    return SQLAlchemyPersistenceError()


__all__: list[str] = [
    "SERIALIZATION_FAILURE_CODES",
    "SQLAlchemyPersistenceError",
    "SessionManagementError",
    "UnitOfWorkError",
    "translate_error",
]
