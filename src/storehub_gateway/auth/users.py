"""Demo user store and the sign-in flow built on it."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from .exceptions import UnknownUserError, WrongPasswordError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .provider import AuthProviderClient

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """Login to password map loaded from settings."""

    def __init__(self, users: Mapping[str, str]) -> None:
        self._users = dict(users)

    def get_password(self, login: str) -> str | None:
        return self._users.get(login)


class AuthService:
    def __init__(
        self, provider: AuthProviderClient, users: InMemoryUserRepository
    ) -> None:
        self._provider = provider
        self._users = users

    async def sign_in(self, login: str, password: str) -> str:
        """Check credentials, then ask the provider for a token.

        Raises:
            UnknownUserError: no such login.
            WrongPasswordError: password mismatch.
            AuthProviderUnavailableError: token could not be issued.
        """
        expected = self._users.get_password(login)
        if expected is None:
            raise UnknownUserError()
        if not hmac.compare_digest(expected.encode(), password.encode()):
            raise WrongPasswordError()
        token = await self._provider.get_token(login)
        logger.info("Token generated", extra={"login": login})
        return token
