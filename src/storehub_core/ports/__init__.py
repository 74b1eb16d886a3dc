"""Ports — protocols implemented by infrastructure packages."""

from __future__ import annotations

from .messaging import IMessageConsumer, IMessagePublisher
from .notifier import IResultNotifier
from .repository import IStoreRepository
from .unit_of_work import UnitOfWork

__all__ = [
    "IMessageConsumer",
    "IMessagePublisher",
    "IResultNotifier",
    "IStoreRepository",
    "UnitOfWork",
]
