"""storehub_core — domain, wire protocol and ports shared by both services."""

from __future__ import annotations

from .cqrs import GENERIC_ERROR_TEXT, Action, CommandMessage, Outcome, ResultMessage
from .domain import Store, StoreData, StoreVersion, StoreVersionData
from .primitives import (
    AuthenticationError,
    ConflictError,
    DeliveryError,
    ErrorKind,
    InternalError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    StoreHubError,
    StoreNotFoundError,
    ValidationError,
    VersionNotFoundError,
)

__all__ = [
    "GENERIC_ERROR_TEXT",
    "Action",
    "AuthenticationError",
    "CommandMessage",
    "ConflictError",
    "DeliveryError",
    "ErrorKind",
    "InternalError",
    "NotFoundError",
    "Outcome",
    "PermissionDeniedError",
    "PersistenceError",
    "ResultMessage",
    "Store",
    "StoreData",
    "StoreHubError",
    "StoreNotFoundError",
    "StoreVersion",
    "StoreVersionData",
    "ValidationError",
    "VersionNotFoundError",
]
