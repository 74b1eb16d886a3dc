"""AuthProviderClient — HTTP client of the token service."""

from __future__ import annotations

import logging

import httpx

from storehub_core.primitives.retry import connect_with_retry

from .exceptions import AuthProviderUnavailableError, TokenError

logger = logging.getLogger(__name__)


class AuthProviderClient:
    """
    Talks to the token service over three endpoints.

    ``GET /generate?login=`` issues a token, ``GET /validate`` checks the
    bearer token it is given and ``GET /ping`` answers when the service is up.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        retry: int = 5,
        retry_delay: float = 2.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._retry = retry
        self._retry_delay = retry_delay
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def _get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.get(path, headers=headers, params=params)
        except httpx.HTTPError as e:
            logger.warning("Auth provider request %s failed: %s", path, e)
            raise AuthProviderUnavailableError() from e

    async def ping(self) -> None:
        response = await self._get("/ping")
        if response.status_code != httpx.codes.OK:
            raise AuthProviderUnavailableError(
                f"auth provider ping answered {response.status_code}"
            )

    async def ping_with_retry(self) -> None:
        """Ping up to ``retry`` times; the last failure propagates."""
        await connect_with_retry(
            self.ping,
            attempts=self._retry,
            delay=self._retry_delay,
            name="auth provider",
        )

    async def validate(self, token: str) -> None:
        """
        Raises:
            TokenError: the provider rejected the token.
            AuthProviderUnavailableError: the provider could not answer.
        """
        response = await self._get(
            "/validate", headers={"Authorization": f"bearer {token}"}
        )
        if response.status_code == httpx.codes.OK:
            return
        if response.status_code == httpx.codes.BAD_REQUEST:
            raise TokenError("token not found in header")
        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise TokenError("invalid or expired token")
        logger.error("Token validation answered %s", response.status_code)
        raise AuthProviderUnavailableError()

    async def get_token(self, login: str) -> str:
        response = await self._get("/generate", params={"login": login})
        if response.status_code != httpx.codes.OK:
            logger.error(
                "Token generation answered %s",
                response.status_code,
                extra={"login": login},
            )
            raise AuthProviderUnavailableError()
        return response.text

    async def health_check(self) -> bool:
        try:
            await self.ping()
        except AuthProviderUnavailableError:
            return False
        return True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
