"""Shared fixtures for storehub tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from joserfc import jwt
from joserfc.jwk import OctKey

from storehub_core.domain.models import StoreData, StoreVersionData

if TYPE_CHECKING:
    from collections.abc import Callable

_SIGNING_KEY = OctKey.import_key("storehub-test-signing-key-0123456789abcdef")


@pytest.fixture
def token_for() -> Callable[[str], str]:
    """Build an HS256 JWT carrying a ``login`` claim."""

    def build(login: str) -> str:
        return jwt.encode({"alg": "HS256"}, {"login": login}, _SIGNING_KEY)

    return build


@pytest.fixture
def store_data() -> StoreData:
    return StoreData(
        name="Corner Shop",
        address="London, Baker Street, 221B",
        owner_name="Holmes, Sherlock",
        opening_time="2024-01-01 09:00:00",
        closing_time="2024-01-01 18:00:00",
    )


@pytest.fixture
def version_data() -> StoreVersionData:
    return StoreVersionData(
        owner_name="Watson, John",
        opening_time="2024-02-01 08:00:00",
        closing_time="2024-02-01 20:00:00",
    )
