from __future__ import annotations

import pytest

from storage_helpers import RecordingNotifier
from storehub_core.adapters.memory import InMemoryStoreRepository
from storehub_core.primitives.retry import RetryPolicy
from storehub_storage import CommandDispatcher, StoreService


@pytest.fixture
def repository() -> InMemoryStoreRepository:
    return InMemoryStoreRepository()


@pytest.fixture
def service(repository: InMemoryStoreRepository) -> StoreService:
    return StoreService(
        repository, retry_policy=RetryPolicy(base_delay=0.0, max_delay=0.0)
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dispatcher(service: StoreService, notifier: RecordingNotifier) -> CommandDispatcher:
    return CommandDispatcher(service, notifier)
