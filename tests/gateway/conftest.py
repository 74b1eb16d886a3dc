from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gateway_helpers import AUTH_URL, FakeTokenService, provider_client
from storehub_gateway.auth import AuthProviderClient

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def token_service(token_for: Callable[[str], str]) -> FakeTokenService:
    return FakeTokenService(token_for)


@pytest.fixture
def auth_provider(token_service: FakeTokenService) -> AuthProviderClient:
    return AuthProviderClient(
        AUTH_URL,
        retry=2,
        retry_delay=0.0,
        client=provider_client(token_service),
    )
