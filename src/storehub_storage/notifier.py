"""HttpResultNotifier — posts result messages to the gateway callback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from storehub_core.primitives.exceptions import DeliveryError

if TYPE_CHECKING:
    from storehub_core.cqrs.results import ResultMessage

logger = logging.getLogger(__name__)


class HttpResultNotifier:
    """
    HTTP POST of ``{"error": ...}`` / ``{"message": ...}`` to the callback URL.

    One attempt per result. A transport failure or a non-2xx answer raises
    ``DeliveryError``; the caller decides whether to log it or propagate.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def notify(self, result: ResultMessage) -> None:
        try:
            response = await self._client.post(self.url, json=result.to_wire())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeliveryError(
                f"callback answered HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DeliveryError(f"callback unreachable: {e}") from e
        logger.debug("Result delivered to %s", self.url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
