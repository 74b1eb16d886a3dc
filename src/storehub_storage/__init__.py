"""storehub_storage — the storage worker behind the command queue."""

from __future__ import annotations

from .config import StorageSettings
from .dispatcher import CommandDispatcher
from .notifier import HttpResultNotifier
from .service import StoreService
from .worker import StorageWorker

__all__ = [
    "CommandDispatcher",
    "HttpResultNotifier",
    "StorageSettings",
    "StorageWorker",
    "StoreService",
]
