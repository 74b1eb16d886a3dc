"""Health check registry — aggregates component health."""

from __future__ import annotations

import asyncio
import datetime
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class HealthRegistry:
    """Named checks returning a truthy value (or awaitable of one) when up."""

    def __init__(self) -> None:
        self._checks: dict[str, Callable[[], Any]] = {}

    def register(self, name: str, check: Callable[[], Any]) -> None:
        """Register a health check."""
        self._checks[name] = check

    async def check_all(self) -> dict[str, str]:
        """Run all checks and return status map."""
        result: dict[str, str] = {}
        for name, check in self._checks.items():
            try:
                value = check()
                if asyncio.iscoroutine(value):
                    value = await value
                result[name] = "up" if value else "down"
            except Exception as e:  # noqa: BLE001
                logger.warning("Health check %s raised: %s", name, e)
                result[name] = "down"
        return result

    async def status(self) -> dict[str, Any]:
        """Return full health status report."""
        components = await self.check_all()
        healthy = all(v == "up" for v in components.values())
        return {
            "status": "healthy" if healthy else "unhealthy",
            "components": components,
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }
