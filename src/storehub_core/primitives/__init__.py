"""Lowest-level building blocks: exceptions and retry helpers."""

from __future__ import annotations

from .exceptions import (
    AuthenticationError,
    ConflictError,
    DeliveryError,
    DomainError,
    ErrorKind,
    InfrastructureError,
    InternalError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    StoreHubError,
    StoreNotFoundError,
    ValidationError,
    VersionNotFoundError,
)
from .retry import RetryPolicy, connect_with_retry

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "DeliveryError",
    "DomainError",
    "ErrorKind",
    "InfrastructureError",
    "InternalError",
    "NotFoundError",
    "PermissionDeniedError",
    "PersistenceError",
    "RetryPolicy",
    "StoreHubError",
    "StoreNotFoundError",
    "ValidationError",
    "VersionNotFoundError",
    "connect_with_retry",
]
